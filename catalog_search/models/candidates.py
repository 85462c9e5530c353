"""
Candidate Record Models
One model per entity category, combined into a tagged union on `category`
"""
from pydantic import BaseModel, Field
from typing import Annotated, List, Literal, Optional, Union
from enum import Enum


class EntityCategory(str, Enum):
    """Searchable entity categories"""
    PERSON = "person"
    ORGANIZATION = "organization"
    RELEASE = "release"
    SERIES = "series"
    ITEM = "item"


class CandidateBase(BaseModel):
    """
    Fields shared by every candidate
    Only category, id, name and relevance are common across categories
    """
    id: int = Field(..., description="Primary key within the category")
    name: str = Field(..., description="Display name")
    relevance: int = Field(..., ge=0, description="Ranking score, higher is better")

    @property
    def identity(self) -> tuple:
        return (self.category, self.id)


class PersonCandidate(CandidateBase):
    """Player"""
    category: Literal["person"] = "person"
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    nick_name: Optional[str] = None
    slug: str
    card_count: int = 0
    is_hof: bool = False


class OrganizationCandidate(CandidateBase):
    """Team"""
    category: Literal["organization"] = "organization"
    slug: str
    abbreviation: Optional[str] = None
    city: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    player_count: int = 0


class ReleaseCandidate(CandidateBase):
    """Card set"""
    category: Literal["release"] = "release"
    slug: str
    year: Optional[int] = None
    manufacturer_name: Optional[str] = None


class SeriesCandidate(CandidateBase):
    """Series within a set, including parallels"""
    category: Literal["series"] = "series"
    slug: str
    set_name: Optional[str] = None
    set_slug: Optional[str] = None
    year: Optional[int] = None
    manufacturer_name: Optional[str] = None
    color_name: Optional[str] = None
    color_hex: Optional[str] = None
    card_count: int = 0
    print_run: Optional[str] = Field(None, description="Print run as displayed, e.g. '/99'")
    is_parallel: bool = False


class ItemCandidate(CandidateBase):
    """Individual card"""
    category: Literal["item"] = "item"
    card_number: Optional[str] = None
    player_names: List[str] = Field(default_factory=list)
    team_names: List[str] = Field(default_factory=list)
    series_name: Optional[str] = None
    series_slug: Optional[str] = None
    set_name: Optional[str] = None
    set_slug: Optional[str] = None
    year: Optional[int] = None
    manufacturer_name: Optional[str] = None
    color_name: Optional[str] = None
    color_hex: Optional[str] = None
    print_run: Optional[int] = None
    is_rookie: bool = False
    is_autograph: bool = False
    is_relic: bool = False
    is_parallel: bool = False


Candidate = Annotated[
    Union[
        PersonCandidate,
        OrganizationCandidate,
        ReleaseCandidate,
        SeriesCandidate,
        ItemCandidate,
    ],
    Field(discriminator="category"),
]

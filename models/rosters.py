from enum import Enum
from typing import Any

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator


def new_entity_id() -> str:
  return str(ObjectId())


class PoolType(str, Enum):
  TEAM = 'team'
  SHADOW = 'shadow'
  WITHDRAWN = 'withdrawn'


class StaffRole(str, Enum):
  COACH = 'coach'
  ASST_COACH = 'asstCoach'
  MANAGER = 'manager'
  UMPIRE = 'umpire'


class SaveStatus(str, Enum):
  IDLE = 'idle'
  SAVING = 'saving'
  SAVED = 'saved'
  ERROR = 'error'


# --- sub documents of a division


class Player(BaseModel):
  """A player entry. Pool-specific fields (e.g. reason) are dropped on parse."""
  model_config = ConfigDict(extra='ignore')

  id: str = Field(default_factory=new_entity_id)
  name: str = Field(...)
  club: str = ''
  icon: str = ''
  playerId: str | None = None

  @field_validator('name')
  @classmethod
  def name_not_blank(cls, v: str) -> str:
    if not v or not v.strip():
      raise ValueError('name must not be empty')
    return v.strip()


class WithdrawnPlayer(Player):
  reason: str = Field(...)

  def to_player(self) -> Player:
    return Player(**self.model_dump(exclude={'reason'}))


class Staff(BaseModel):
  model_config = ConfigDict(extra='ignore')

  id: str = Field(default_factory=new_entity_id)
  name: str = Field(...)
  club: str = ''
  icon: str = ''
  staffId: str | None = None

  @field_validator('name')
  @classmethod
  def name_not_blank(cls, v: str) -> str:
    if not v or not v.strip():
      raise ValueError('name must not be empty')
    return v.strip()


class TeamStaff(BaseModel):
  coach: Staff | None = None
  asstCoach: Staff | None = None
  manager: Staff | None = None
  umpire: Staff | None = None


class Team(BaseModel):
  name: str = Field(...)
  players: list[Player] = Field(default_factory=list)
  staff: TeamStaff = Field(default_factory=TeamStaff)


class Selector(BaseModel):
  model_config = ConfigDict(extra='ignore')

  id: str = Field(default_factory=new_entity_id)
  name: str = Field(...)
  club: str = ''
  icon: str | None = None
  isChair: bool = False
  userId: str | None = None

  @field_validator('name')
  @classmethod
  def name_not_blank(cls, v: str) -> str:
    if not v or not v.strip():
      raise ValueError('name must not be empty')
    return v.strip()


# --- division document


class Roster(BaseModel):
  """One division: the roster of an age group in one season."""
  model_config = ConfigDict(extra='ignore')

  ageGroup: str = Field(...)
  season: str = Field(...)
  lastUpdated: str = ''
  version: int | None = None
  teams: list[Team] = Field(default_factory=list)
  shadowPlayers: list[Player] = Field(default_factory=list)
  withdrawn: list[WithdrawnPlayer] = Field(default_factory=list)
  selectors: list[Selector] = Field(default_factory=list)
  trialInfo: Any | None = None
  trainingInfo: Any | None = None
  tournamentInfo: Any | None = None

  @field_validator('ageGroup', 'season', mode='before')
  @classmethod
  def key_not_blank(cls, v: Any) -> str:
    v = str(v).strip() if v is not None else ''
    if not v:
      raise ValueError('must not be empty')
    return v

  @property
  def key(self) -> tuple[str, str]:
    return (self.ageGroup, self.season)

  def find_team(self, team_name: str) -> Team | None:
    return next((t for t in self.teams if t.name == team_name), None)


class RosterMetadata(BaseModel):
  ageGroups: list[str] = Field(default_factory=list)
  seasons: list[str] = Field(default_factory=list)


# --- commands


class Placement(BaseModel):
  type: PoolType = Field(...)
  ageGroup: str = Field(...)
  teamName: str | None = None
  index: int | None = None
  playerId: str | None = Field(
      default=None, description="Entity id of the player; wins over index when both are given")


class MoveCommand(BaseModel):
  source: Placement = Field(...)
  destination: PoolType = Field(...)
  destinationTeamName: str | None = None
  reason: str | None = None


class MoveResult(BaseModel):
  moved: bool = Field(...)
  roster: Roster = Field(...)


class TeamInput(BaseModel):
  name: str = Field(...)


class WithdrawalReasonInput(BaseModel):
  reason: str = Field(...)


class DivisionInfoUpdate(BaseModel):
  trialInfo: Any | None = None
  trainingInfo: Any | None = None
  tournamentInfo: Any | None = None


class BulkDeleteInput(BaseModel):
  ageGroups: list[str] = Field(...)
  season: str | None = None

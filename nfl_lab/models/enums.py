from enum import Enum


class View(str, Enum):
    HOME = "home"
    TEAMS = "teams"
    DETAIL = "detail"


class GradeCategory(str, Enum):
    OFFENSE = "offense"
    DEFENSE = "defense"
    # Analytics rows may carry other categories; these are the ones rendered

"""
Play Store Value Objects

Enumerations used to address store listings.
These are immutable objects defined by their values, not identity.
"""
from enum import Enum
from typing import Optional


class Collection(Enum):
    """
    Top chart collections available inside a category.

    The value is the collection id used in listing URLs.
    """
    TOP_FREE = "topselling_free"
    TOP_PAID = "topselling_paid"
    GROSSING = "topgrossing"
    NEW_FREE = "topselling_new_free"
    NEW_PAID = "topselling_new_paid"

    @property
    def id(self) -> str:
        return self.value

    @classmethod
    def from_id(cls, collection_id: str) -> Optional["Collection"]:
        for member in cls:
            if member.value == collection_id:
                return member
        return None


class ReviewSortOrder(Enum):
    """Sort order accepted by the review listing (`sort` query parameter)."""
    MOST_HELPFUL = 1
    NEWEST = 2
    RATING = 3

    @classmethod
    def from_value(cls, value: int) -> Optional["ReviewSortOrder"]:
        for member in cls:
            if member.value == value:
                return member
        return None


class Category(Enum):
    """
    Store categories.

    The value is the category id used in listing URLs.
    """
    APPLICATION = "APPLICATION"
    ART_AND_DESIGN = "ART_AND_DESIGN"
    AUTO_AND_VEHICLES = "AUTO_AND_VEHICLES"
    BEAUTY = "BEAUTY"
    BOOKS_AND_REFERENCE = "BOOKS_AND_REFERENCE"
    BUSINESS = "BUSINESS"
    COMICS = "COMICS"
    COMMUNICATION = "COMMUNICATION"
    DATING = "DATING"
    EDUCATION = "EDUCATION"
    ENTERTAINMENT = "ENTERTAINMENT"
    EVENTS = "EVENTS"
    FINANCE = "FINANCE"
    FOOD_AND_DRINK = "FOOD_AND_DRINK"
    HEALTH_AND_FITNESS = "HEALTH_AND_FITNESS"
    HOUSE_AND_HOME = "HOUSE_AND_HOME"
    LIBRARIES_AND_DEMO = "LIBRARIES_AND_DEMO"
    LIFESTYLE = "LIFESTYLE"
    MAPS_AND_NAVIGATION = "MAPS_AND_NAVIGATION"
    MEDICAL = "MEDICAL"
    MUSIC_AND_AUDIO = "MUSIC_AND_AUDIO"
    NEWS_AND_MAGAZINES = "NEWS_AND_MAGAZINES"
    PARENTING = "PARENTING"
    PERSONALIZATION = "PERSONALIZATION"
    PHOTOGRAPHY = "PHOTOGRAPHY"
    PRODUCTIVITY = "PRODUCTIVITY"
    SHOPPING = "SHOPPING"
    SOCIAL = "SOCIAL"
    SPORTS = "SPORTS"
    TOOLS = "TOOLS"
    TRAVEL_AND_LOCAL = "TRAVEL_AND_LOCAL"
    VIDEO_PLAYERS = "VIDEO_PLAYERS"
    WEATHER = "WEATHER"
    GAME = "GAME"
    GAME_ACTION = "GAME_ACTION"
    GAME_ADVENTURE = "GAME_ADVENTURE"
    GAME_ARCADE = "GAME_ARCADE"
    GAME_BOARD = "GAME_BOARD"
    GAME_CARD = "GAME_CARD"
    GAME_CASINO = "GAME_CASINO"
    GAME_CASUAL = "GAME_CASUAL"
    GAME_EDUCATIONAL = "GAME_EDUCATIONAL"
    GAME_MUSIC = "GAME_MUSIC"
    GAME_PUZZLE = "GAME_PUZZLE"
    GAME_RACING = "GAME_RACING"
    GAME_ROLE_PLAYING = "GAME_ROLE_PLAYING"
    GAME_SIMULATION = "GAME_SIMULATION"
    GAME_SPORTS = "GAME_SPORTS"
    GAME_STRATEGY = "GAME_STRATEGY"
    GAME_TRIVIA = "GAME_TRIVIA"
    GAME_WORD = "GAME_WORD"
    FAMILY = "FAMILY"

    @property
    def id(self) -> str:
        return self.value

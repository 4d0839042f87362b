"""
Explicit validation & Pydantic models
- Models are used to validate and serialize/deserialize data
  exchanged between the client and server.
- Defines the structure of API requests and responses.
"""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from .codes import Code

# 1. Represents response when a new solver session is started
class NewGameResponse(BaseModel):
    game_id: str = Field(..., description="Unique ID for the session")
    status: Literal["in_progress", "solved"] = Field(..., description="Current state of the session")
    guess: str = Field(..., description="The solver's first guess, e.g. '0123'")
    round: int = Field(..., description="Round number of the guess waiting for an answer")

# 2. Validates the human's answer to the current guess
class FeedbackRequest(BaseModel):
    bulls: int = Field(..., ge=0, le=4, description="Right digit, right place")
    cows: int = Field(..., ge=0, le=4, description="Right digit, wrong place")

    @model_validator(mode="after")
    def validate_total(self) -> "FeedbackRequest":
        # Achievability (e.g. 3 bulls 1 cow) is the solver's business, not ours
        if self.bulls + self.cows > 4:
            raise ValueError("Bulls and cows cannot add up to more than 4.")
        return self

    model_config = {
        "json_schema_extra": {
            "examples": [
                { "bulls": 1, "cows": 2 },
                { "bulls": 4, "cows": 0 },      # solved
            ]
        }
    }

# 3. Describes the feedback for a single guess
class GuessEntryOut(BaseModel):
    guess: str = Field(..., description="The solver's guess")
    bulls: int = Field(..., description="Digits in the right place")
    cows: int = Field(..., description="Digits present but in the wrong place")
    message: str = Field(..., description="Feedback message")

# 4. Represents the overall state of a session
class GameState(BaseModel):
    game_id: str = Field(..., description="Unique ID for the session")
    status: Literal["in_progress", "solved"] = Field(..., description="Current state of the session")
    rounds: int = Field(..., description="Answers recorded so far")
    guess: Optional[str] = Field(None, description="Guess waiting for an answer (none once solved)")
    candidates_left: int = Field(..., description="Secrets still consistent with every answer")
    history: List[GuessEntryOut] = Field(..., description="All guesses made so far with feedback")

# 5. Result of reporting feedback
class FeedbackResponse(BaseModel):
    status: Literal["in_progress", "solved"] = Field(..., description="Current state of the session")
    rounds: int = Field(..., description="Answers recorded so far")
    next_guess: Optional[str] = Field(None, description="The solver's next guess")
    secret: Optional[str] = Field(None, description="The secret (once solved)")
    candidates_left: int = Field(..., description="Secrets still consistent with every answer")
    note: Optional[str] = Field(None, description="Extra note (ex. 'Solved in 5 rounds.')")

# 6. Remaining candidates for a session
class CandidatesOut(BaseModel):
    game_id: str = Field(..., description="Unique ID for the session")
    total: int = Field(..., description="How many secrets are still possible")
    candidates: List[str] = Field(..., description="Up to `limit` of them")

# 7. Compare two codes directly
class ScoreRequest(BaseModel):
    secret: str = Field(..., description="4 distinct digits, e.g. '0123'")
    guess: str = Field(..., description="4 distinct digits, e.g. '3210'")

    @field_validator("secret", "guess")
    @classmethod
    def validate_code(cls, value: str) -> str:
        # InvalidCodeError is a ValueError, so pydantic turns it into a 422
        return str(Code.parse(value))

class ScoreResponse(BaseModel):
    bulls: int = Field(..., description="Digits in the right place")
    cows: int = Field(..., description="Digits present but in the wrong place")
    message: str = Field(..., description="Feedback message")

# 8. Response schema for scoreboard
class StatsOut(BaseModel):
    games_started: int = Field(..., description="Sessions started")
    games_solved: int = Field(..., description="Sessions that reached 4 bulls")
    contradictions: int = Field(..., description="Answers rejected because no secret fit them")
    average_rounds_to_solve: Optional[float] = Field(
        None, description="Average rounds used in solved sessions"
    )
    fastest_solve_rounds: Optional[int] = Field(
        None, description="Fewest rounds taken to solve a session"
    )

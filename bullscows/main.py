'''
Bulls and Cows solver API

The human thinks of a secret (4 distinct digits); the server guesses.

Endpoints:
POST /games                      -> start a solver session, get the first guess
GET  /games/{id}                 -> read state & history
POST /games/{id}/feedback        -> answer the current guess with bulls/cows
GET  /games/{id}/candidates      -> secrets still consistent with the answers

Extras:
POST /score                      -> bulls/cows of a guess against a secret
GET  /stats                      -> scoreboard
POST /stats/reset                -> reset scoreboard
'''

from typing import Optional

from fastapi import FastAPI, HTTPException, Depends, Query
from fastapi.middleware.cors import CORSMiddleware

from .codes import Code, Feedback
from .config import configure_logging, load_settings
from .engine import NoConsistentSecret, evaluate_feedback
from .random_client import fetch_seed
from .store import Game, GameStore

from .schemas import (
    NewGameResponse,
    FeedbackRequest,
    FeedbackResponse,
    GameState,
    GuessEntryOut,
    CandidatesOut,
    ScoreRequest,
    ScoreResponse,
    StatsOut,
)

settings = load_settings()
configure_logging(settings.log_level)

app = FastAPI(title="Bulls and Cows Solver API", version="1.0.0")

# Allow everything in dev so the docs and front-end work easily
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

# One process-wide store; sessions live as long as the process
_store = GameStore(opener=settings.opening_guess)

def get_store() -> GameStore:
    return _store

def _to_game_state(game: Game) -> GameState:
    return GameState(
        game_id=game.id,
        status=game.status,
        rounds=game.rounds,
        guess=str(game.current_guess) if game.current_guess is not None else None,
        candidates_left=len(game.breaker.candidates),
        history=[
            GuessEntryOut(
                guess=str(entry.code),
                bulls=entry.feedback.bulls,
                cows=entry.feedback.cows,
                message=entry.feedback.message(),
            )
            for entry in game.breaker.history
        ],
    )

# ---------------- Routes ----------------

@app.post("/games", response_model=NewGameResponse, summary="Start a new solver session")
def start_game(
    seed: Optional[int] = Query(None, description="Fix the tie-breaking for reproducible guesses"),
    store: GameStore = Depends(get_store),
) -> NewGameResponse:
    if seed is None:
        seed = fetch_seed(settings.random_org_enabled, settings.random_org_timeout)
    game = store.create(seed)
    return NewGameResponse(
        game_id=game.id,
        status=game.status,
        guess=str(game.current_guess),
        round=game.rounds + 1,
    )

@app.get("/games/{game_id}", response_model=GameState, summary="Get current session state")
def get_game(
    game_id: str,
    store: GameStore = Depends(get_store),
) -> GameState:
    game = store.get(game_id)
    if not game:
        raise HTTPException(status_code=404, detail="Game not found")
    return _to_game_state(game)

@app.post("/games/{game_id}/feedback", response_model=FeedbackResponse, summary="Answer the current guess")
def submit_feedback(
    game_id: str,
    payload: FeedbackRequest,
    store: GameStore = Depends(get_store),
) -> FeedbackResponse:
    # store.report() records the answer and lines up the next guess
    try:
        game = store.report(game_id, Feedback(payload.bulls, payload.cows))
    except NoConsistentSecret:
        raise HTTPException(
            status_code=409,
            detail="No secret matches all your answers. Check bulls/cows for this guess and resend.",
        )
    if not game:
        raise HTTPException(status_code=404, detail="Game not found")

    solved = game.status == "solved"
    secret = str(game.breaker.history.latest.code) if solved else None
    return FeedbackResponse(
        status=game.status,
        rounds=game.rounds,
        next_guess=str(game.current_guess) if game.current_guess is not None else None,
        secret=secret,
        candidates_left=len(game.breaker.candidates),
        note=(f"Solved in {game.rounds} round(s). No more answers needed." if solved else None),
    )

@app.get("/games/{game_id}/candidates", response_model=CandidatesOut, summary="List secrets still possible")
def get_candidates(
    game_id: str,
    limit: int = Query(100, ge=1, le=5040),
    store: GameStore = Depends(get_store),
) -> CandidatesOut:
    candidates = store.candidates(game_id)
    if candidates is None:
        raise HTTPException(status_code=404, detail="Game not found")
    return CandidatesOut(
        game_id=game_id,
        total=len(candidates),
        candidates=[str(c) for c in candidates[:limit]],
    )

@app.post("/score", response_model=ScoreResponse, summary="Score a guess against a secret")
def score(payload: ScoreRequest) -> ScoreResponse:
    feedback = evaluate_feedback(Code.parse(payload.secret), Code.parse(payload.guess))
    return ScoreResponse(bulls=feedback.bulls, cows=feedback.cows, message=feedback.message())

@app.get("/stats", response_model=StatsOut, summary="Get scoreboard")
def get_stats(store: GameStore = Depends(get_store)) -> StatsOut:
    stats = store.get_stats()
    return StatsOut(
        games_started=stats.games_started,
        games_solved=stats.games_solved,
        contradictions=stats.contradictions,
        average_rounds_to_solve=stats.average_rounds_to_solve,
        fastest_solve_rounds=stats.fastest_solve_rounds,
    )

@app.post("/stats/reset", summary="Reset the scoreboard")
def reset_stats(store: GameStore = Depends(get_store)) -> dict:
    store.reset_stats()
    return {"message": "Stats reset."}

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..core.config import get_settings
from ..core.database import get_db
from ..core.exceptions import NotFoundError
from ..core.security import issue_session_cookie, require_session, resolve_session
from ..schemas.meal import MealCreate, MealDetailResponse, MealListResponse, MealMetrics, MealUpdate
from ..services import ownership
from ..services.meal_store import MealStore
from ..services.metrics import compute_metrics
from ..services.sessions import SessionIdentity

router = APIRouter(prefix="/meals", tags=["meals"])


def get_store(db: Session = Depends(get_db)) -> MealStore:
    return MealStore(db)


@router.post("/new", status_code=status.HTTP_204_NO_CONTENT)
def create_meal(
    payload: MealCreate,
    response: Response,
    identity: SessionIdentity = Depends(resolve_session),
    store: MealStore = Depends(get_store),
):
    store.create(
        identity,
        title=payload.title,
        description=payload.description,
        in_diet=payload.in_diet,
        created_at=payload.created_at,
    )
    issue_session_cookie(response, identity)


@router.get("/list", response_model=MealListResponse)
def list_meals(session_id: str = Depends(require_session), store: MealStore = Depends(get_store)):
    return MealListResponse(data=store.list_by_session(session_id))


@router.get("/metrics", response_model=MealMetrics)
def get_metrics(session_id: str = Depends(require_session), store: MealStore = Depends(get_store)):
    return compute_metrics(store, session_id)


@router.get("/reset", status_code=status.HTTP_204_NO_CONTENT)
def reset_meals(store: MealStore = Depends(get_store)):
    if not get_settings().allow_reset:
        raise NotFoundError("Not found")
    store.reset()


@router.get("/{meal_id}", response_model=MealDetailResponse)
def get_meal(meal_id: str, session_id: str = Depends(require_session), store: MealStore = Depends(get_store)):
    meal = store.get_by_id(meal_id)
    if meal is None:
        return MealDetailResponse(data=None)
    ownership.enforce(ownership.authorize(session_id, store.get_owner(meal_id)), meal_id)
    return MealDetailResponse(data=meal)


@router.delete("/delete/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meal(meal_id: str, session_id: str = Depends(require_session), store: MealStore = Depends(get_store)):
    ownership.enforce(ownership.authorize(session_id, store.get_owner(meal_id)), meal_id)
    store.delete(meal_id)


@router.patch("/edit/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
def edit_meal(
    meal_id: str,
    payload: MealUpdate | None = None,
    session_id: str = Depends(require_session),
    store: MealStore = Depends(get_store),
):
    ownership.enforce(ownership.authorize(session_id, store.get_owner(meal_id)), meal_id)
    store.update(meal_id, payload.changes() if payload else {})

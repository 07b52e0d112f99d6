from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Form, Request
from fastapi.responses import JSONResponse, RedirectResponse

from .bank import BankSource
from .config import settings
from .errors import SessionClosedError, SessionNotFoundError
from .globals import bank_source, session_store
from .initializer import initialize_session
from .review import NavigationTarget
from .store import SessionEntry, SessionStore


router = APIRouter()


# --- Dependencies ---
def get_bank_source() -> BankSource:
    return bank_source


def get_session_store() -> SessionStore:
    return session_store


def get_session_id(
    session_id: Optional[str] = Cookie(None, alias=settings.SESSION_COOKIE_NAME)
) -> Optional[str]:
    return session_id


def get_active_entry(
    session_id: Optional[str] = Depends(get_session_id),
    store: SessionStore = Depends(get_session_store),
) -> SessionEntry:
    entry = store.get(session_id)
    if entry is None:
        raise SessionNotFoundError("Session invalid")
    return entry


# --- Session start ---
@router.post("/quiz/{course_code}")
async def start_quiz_session(
    request: Request,
    previous_id: Optional[str] = Depends(get_session_id),
    source: BankSource = Depends(get_bank_source),
    store: SessionStore = Depends(get_session_store),
):
    session = await initialize_session(str(request.url), source)

    # A new session replaces the previous one for this client.
    store.remove(previous_id)
    store.add(session)
    session.start()

    response = JSONResponse(session.to_dict())
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session.session_id,
        httponly=True,
        samesite="Lax",
    )
    return response


# --- Answering ---
@router.get("/api/session")
async def get_session_state(entry: SessionEntry = Depends(get_active_entry)):
    return entry.session.to_dict()


@router.post("/api/session/answer")
async def select_answer(
    selected_option_index: int = Form(...),
    entry: SessionEntry = Depends(get_active_entry),
):
    session = entry.session
    if session.submitted:
        raise SessionClosedError("The quiz has already been submitted.")

    options = session.current_question.options
    if not (0 <= selected_option_index < len(options)):
        return JSONResponse({"error": "Invalid option"}, status_code=400)
    session.select_answer(options[selected_option_index])
    return session.to_dict()


@router.post("/api/session/advance")
async def advance(entry: SessionEntry = Depends(get_active_entry)):
    entry.session.advance()
    return entry.session.to_dict()


# --- Review ---
def _review_payload(entry: SessionEntry):
    if not entry.session.submitted:
        return JSONResponse({"error": "Quiz not submitted yet"}, status_code=409)
    return {"summary": entry.review.summary(), "items": entry.review.items()}


@router.get("/api/result")
async def get_result_data(entry: SessionEntry = Depends(get_active_entry)):
    return _review_payload(entry)


@router.post("/api/review/filter")
async def set_review_filter(
    only_incorrect: bool = Form(...),
    entry: SessionEntry = Depends(get_active_entry),
):
    entry.review.set_filter(only_incorrect)
    return _review_payload(entry)


@router.post("/api/review/expand/{display_index}")
async def toggle_review_item(
    display_index: int, entry: SessionEntry = Depends(get_active_entry)
):
    entry.review.toggle_expand(display_index)
    return _review_payload(entry)


@router.post("/api/review/navigate/{target}")
async def leave_review(
    target: str,
    entry: SessionEntry = Depends(get_active_entry),
    store: SessionStore = Depends(get_session_store),
):
    try:
        nav_target = NavigationTarget.from_name(target)
    except KeyError:
        return JSONResponse({"error": f"Unknown target {target}"}, status_code=404)

    path = entry.review.navigate(nav_target)
    store.remove(entry.session.session_id)
    redirect = RedirectResponse(url=path, status_code=302)
    redirect.delete_cookie(settings.SESSION_COOKIE_NAME)
    return redirect


# --- Misc ---
@router.post("/api/reset")
async def reset_session(
    session_id: Optional[str] = Depends(get_session_id),
    store: SessionStore = Depends(get_session_store),
):
    store.remove(session_id)
    response = JSONResponse({"status": "success"})
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response


@router.get("/api/health")
async def health_check(
    source: BankSource = Depends(get_bank_source),
    store: SessionStore = Depends(get_session_store),
):
    return {
        "status": "healthy",
        "bank_source": type(source).__name__,
        "active_sessions": len(store),
    }

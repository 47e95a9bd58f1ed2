"""
FastAPI routes for sign-in and the copy/paste record.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated
from urllib.parse import quote_plus

from fastapi import APIRouter, Depends, Form, Header, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from copypaste.clients import GoogleOAuthClient
from copypaste.core.config import AppSettings
from copypaste.core.errors import MalformedInputError, NotConnectedError
from copypaste.dependencies import (
    get_app_settings,
    get_google_oauth_client,
    get_message_service,
    get_session_state,
    get_templates,
    get_token_validator,
)
from copypaste.models import CopyRequest
from copypaste.services import (
    MessageService,
    SessionState,
    TokenValidator,
    decode_id_token,
    generate_state_token,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    session: Annotated[SessionState, Depends(get_session_state)],
    templates: Annotated[Jinja2Templates, Depends(get_templates)],
    settings: Annotated[AppSettings, Depends(get_app_settings)],
) -> Response:
    """Issue a fresh anti-forgery state token and serve the sign-in page."""
    state = generate_state_token()
    session.issue_state(state)
    logger.info("Issued anti-forgery state for new page load")

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "application_name": settings.google.application_name,
            "client_id": settings.google.client_id,
            "scope": settings.oauth.scope,
            "state": quote_plus(state),
        },
    )


@router.post("/connect", response_class=PlainTextResponse)
async def connect(
    request: Request,
    session: Annotated[SessionState, Depends(get_session_state)],
    oauth_client: Annotated[GoogleOAuthClient, Depends(get_google_oauth_client)],
    state: str | None = Query(default=None, description="Anti-forgery state token."),
) -> str:
    """Exchange the one-time authorization code in the body and sign the user in."""
    session.verify_state(state)

    code = (await request.body()).decode("utf-8").strip()
    token = await oauth_client.exchange_authorization_code(code)
    gplus_id = decode_id_token(token.id_token)

    if session.is_connected_as(gplus_id):
        logger.info("User %s already connected", gplus_id)
        return "Connected"

    session.connect(token.access_token, gplus_id)
    logger.info("Connected user %s", gplus_id)
    return "Connected"


@router.get("/disconnect", response_class=PlainTextResponse)
async def disconnect(
    session: Annotated[SessionState, Depends(get_session_state)],
    oauth_client: Annotated[GoogleOAuthClient, Depends(get_google_oauth_client)],
) -> str:
    """Revoke the current user's token and reset their session."""
    access_token = session.access_token
    if access_token is None:
        raise NotConnectedError("Current user not connected")

    await oauth_client.revoke_token(access_token)
    session.clear_access_token()
    logger.info("Disconnected user %s", session.gplus_id)
    return "Disconnected"


@router.post("/copy")
async def post_copy(
    request: Request,
    messages: Annotated[MessageService, Depends(get_message_service)],
) -> JSONResponse:
    """Store text posted as JSON for the identifier it names."""
    try:
        payload = CopyRequest.model_validate_json(await request.body())
    except ValidationError as exc:
        raise MalformedInputError(f"Invalid copy payload: {exc}") from exc

    messages.save(payload.identifier, payload.text)
    return JSONResponse({"success": True})


@router.post("/copyForm", response_class=PlainTextResponse)
async def copy_form(
    session: Annotated[SessionState, Depends(get_session_state)],
    messages: Annotated[MessageService, Depends(get_message_service)],
    pasta: Annotated[str, Form()] = "",
) -> str:
    """Store text submitted from the web page for the signed-in user."""
    gplus_id = session.gplus_id
    if not gplus_id:
        raise NotConnectedError("Current user not connected")

    messages.save(gplus_id, pasta)
    return "Check your phone!"


@router.get("/paste")
async def paste(
    validator: Annotated[TokenValidator, Depends(get_token_validator)],
    messages: Annotated[MessageService, Depends(get_message_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> JSONResponse:
    """Return the record of the user the bearer token belongs to."""
    user_id = await validator.validate(authorization)
    message = messages.get(user_id)
    return JSONResponse(message.model_dump(by_alias=True), status_code=HTTPStatus.OK)

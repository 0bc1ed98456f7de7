# flake8: noqa

import logging
import re
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI, Form, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from fastapi.templating import Jinja2Templates
from jinja2 import TemplateError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import db as credential_db
from .auth import LoginRequired, login_response, redirect_to_login, require_user
from .config import Settings, get_settings
from .recipes import dashboard_for, get_recipe, load_recipes, recipe_detail
from .schemas import LoginData

logger = logging.getLogger(__name__)

LOGIN_ERROR = "ユーザー名またはパスワードが間違っています"
_RECIPE_ID = re.compile(r"[+-]?[0-9]+")

router = APIRouter()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("recipe site ready with %d recipe(s)", len(app.state.recipes))
    yield
    logger.info("Server stopped")


def _render(request: Request, name: str, context: dict, status_code: int = 200):
    templates = request.app.state.templates
    try:
        return templates.TemplateResponse(
            request, name, context, status_code=status_code
        )
    except TemplateError:
        logger.exception("failed to render %s", name)
        return PlainTextResponse("Template Error", status_code=500)


def not_found(request: Request):
    return _render(request, "not_found.html", {}, status_code=404)


def _dump_credentials(users) -> HTMLResponse:
    # rows go out verbatim, the dump page is part of the exercise
    parts = [
        "<h1>全ユーザー情報</h1><table border='1'>"
        "<tr><th>ユーザー名</th><th>パスワード</th></tr>"
    ]
    for user in users:
        parts.append(f"<tr><td>{user.username}</td><td>{user.password}</td></tr>")
    parts.append("</table>")
    return HTMLResponse("".join(parts))


@router.get("/", response_class=HTMLResponse)
@router.get("/login", response_class=HTMLResponse)
def login_form(request: Request):
    return _render(request, "login.html", LoginData().model_dump())


@router.post("/", response_class=HTMLResponse)
@router.post("/login", response_class=HTMLResponse)
def login(request: Request, username: str = Form(""), password: str = Form("")):
    try:
        with credential_db.credential_store(request.app.state.credentials) as db:
            users = credential_db.find_users(db, username, password)
    except SQLAlchemyError:
        logger.exception("login query failed")
        return PlainTextResponse("Database Error", status_code=500)

    logger.info("login attempt for %r matched %d row(s)", username, len(users))
    if not users:
        return _render(request, "login.html", LoginData(error=LOGIN_ERROR).model_dump())
    if len(users) > 1:
        return _dump_credentials(users)
    return login_response(users[0].username)


@router.api_route("/dashboard", methods=["GET", "POST"], response_class=HTMLResponse)
def dashboard(request: Request, user: str = Depends(require_user)):
    state = request.app.state
    data = dashboard_for(user, state.recipes, state.settings.PRIVILEGED_USER)
    return _render(request, "dashboard.html", {"data": data})


@router.api_route("/recipe/{recipe_id:path}", methods=["GET", "POST"])
def view_recipe(
    request: Request,
    recipe_id: str,
    user: str = Depends(require_user),
):
    state = request.app.state
    # first value wins when format is repeated
    fmt = next(iter(request.query_params.getlist("format")), "")
    if not _RECIPE_ID.fullmatch(recipe_id):
        return not_found(request)
    recipe = get_recipe(state.recipes, int(recipe_id))
    if recipe is None:
        logger.debug("recipe %s not found (user=%r)", recipe_id, user)
        return not_found(request)

    if "image" in fmt:
        return Response(content=recipe.image, media_type=recipe.content_type)

    detail = recipe_detail(recipe, state.settings.DOWNLOAD_RECIPE_ID)
    return _render(
        request,
        "recipe_detail.html",
        {"recipe": detail, "flag_filename": state.settings.FLAG_FILENAME},
    )


@router.api_route("/download/{filename:path}", methods=["GET", "POST"])
def download(request: Request, filename: str, user: str = Depends(require_user)):
    state = request.app.state
    flag_filename = state.settings.FLAG_FILENAME
    if filename != flag_filename:
        return not_found(request)
    logger.info("reward archive downloaded by %r", user)
    return Response(
        content=state.flag_archive,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{flag_filename}"'},
    )


# registered last: every other path is the login page
@router.get("/{rest:path}", response_class=HTMLResponse)
def fallback_login_form(request: Request, rest: str):
    return login_form(request)


@router.post("/{rest:path}", response_class=HTMLResponse)
def fallback_login(
    request: Request, rest: str, username: str = Form(""), password: str = Form("")
):
    return login(request, username, password)


async def login_required_handler(request: Request, exc: LoginRequired):
    return redirect_to_login()


async def not_found_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return not_found(request)
    return await http_exception_handler(request, exc)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app and load every static resource once."""
    settings = settings or get_settings()

    app = FastAPI(title="Recipe CTF", lifespan=lifespan)
    app.state.settings = settings
    app.state.templates = Jinja2Templates(directory=str(settings.TEMPLATES_DIR))
    app.state.recipes = load_recipes(settings.ASSETS_DIR, settings.RECIPES_FILE)
    app.state.credentials = credential_db.load_credentials(settings.users_csv_path)
    app.state.flag_archive = settings.flag_path.read_bytes()
    logger.info(
        "loaded %d credential row(s) and a %d byte reward archive",
        len(app.state.credentials),
        len(app.state.flag_archive),
    )

    app.add_exception_handler(LoginRequired, login_required_handler)
    app.add_exception_handler(StarletteHTTPException, not_found_handler)
    app.include_router(router)
    return app


app = create_app()

from datetime import datetime

from flask import (
    Blueprint,
    current_app,
    flash,
    g,
    jsonify,
    redirect,
    render_template,
    request,
    session,
    url_for,
)

from . import auth
from .errors import Forbidden, NotFound, TinyAppError, Unauthorized, ValidationError
from .visits import load_visited, save_visited

bp = Blueprint("tinyapp", __name__)


def get_store():
    return current_app.extensions["tinyapp.store"]


def require_user() -> str:
    if g.user is None:
        raise Unauthorized("Please log in first.")
    return g.user.id


def owned_link(code: str):
    """The link `code` if the acting user owns it."""
    link = get_store().get(code)
    if link is None:
        raise NotFound(f"Short link {code} does not exist.")
    if g.user is None:
        raise Unauthorized("Please log in first.")
    if link.owner_id != g.user.id:
        raise Forbidden("That link belongs to another user.")
    return link


@bp.before_app_request
def load_user():
    g.user = auth.current_user(get_store())


@bp.app_context_processor
def inject_globals():
    return {"user": g.get("user"), "year": datetime.utcnow().year}


@bp.app_errorhandler(TinyAppError)
def handle_tinyapp_error(e: TinyAppError):
    if isinstance(e, Unauthorized):
        return render_template("accounts.html", title="TinyApp – Log in", action="login", err=e.message), e.status_code
    return render_template("home.html", title="TinyApp", heading="Something went wrong", err=e.message), e.status_code


@bp.app_errorhandler(404)
def handle_not_found(e):
    return render_template("home.html", title="TinyApp – Not found", heading="Page not found", err="That page does not exist."), 404


@bp.get("/")
def home():
    return render_template("home.html", title="TinyApp")


@bp.get("/login")
def login_form():
    if g.user:
        return redirect(url_for("tinyapp.urls_index"))
    return render_template("accounts.html", title="TinyApp – Log in", action="login")


@bp.get("/register")
def register_form():
    if g.user:
        return redirect(url_for("tinyapp.urls_index"))
    return render_template("accounts.html", title="TinyApp – Register", action="register")


@bp.post("/login")
def login():
    try:
        user = auth.authenticate(get_store(), request.form.get("email", ""), request.form.get("password", ""))
    except Forbidden as e:
        return render_template("accounts.html", title="TinyApp – Log in", action="login", err=e.message), e.status_code
    auth.login_user(user)
    return redirect(url_for("tinyapp.urls_index"))


@bp.post("/register")
def register():
    try:
        user = auth.register(
            get_store(),
            request.form.get("email", ""),
            request.form.get("password", ""),
            rounds=current_app.config["BCRYPT_ROUNDS"],
        )
    except ValidationError as e:
        return render_template("accounts.html", title="TinyApp – Register", action="register", err=e.message), e.status_code
    auth.login_user(user)
    flash("Welcome to TinyApp.", "success")
    return redirect(url_for("tinyapp.urls_index"))


@bp.post("/logout")
def logout():
    auth.logout_user()
    return redirect(url_for("tinyapp.urls_index"))


@bp.get("/urls")
def urls_index():
    user_id = require_user()
    urls = get_store().list_for_owner(user_id)
    return render_template("urls_index.html", title="TinyApp – My URLs", urls=urls)


@bp.get("/urls.json")
def urls_json():
    return jsonify({code: link.to_dict() for code, link in get_store().all_links().items()})


@bp.get("/urls/new")
def urls_new():
    require_user()
    return render_template("urls_new.html", title="TinyApp – New URL")


@bp.post("/urls")
def urls_create():
    user_id = require_user()
    long_url = (request.form.get("longURL") or "").strip()
    if not long_url:
        raise ValidationError("Destination URL required.")
    link = get_store().shorten(long_url, user_id)
    flash(f"Saved /u/{link.code} → {link.destination_url}", "success")
    return redirect(url_for("tinyapp.urls_show", code=link.code))


@bp.get("/urls/<code>")
def urls_show(code):
    link = owned_link(code)
    visitors = get_store().visitors_for(code)
    return render_template("urls_show.html", title=f"TinyApp – {code}", link=link, visitors=visitors)


@bp.route("/urls/<code>", methods=["POST", "PUT"])
def urls_update(code):
    require_user()
    owned_link(code)
    long_url = (request.form.get("longURL") or "").strip()
    if not long_url:
        raise ValidationError("Destination URL required.")
    get_store().update(code, long_url, reset_stats=current_app.config["RESET_STATS_ON_EDIT"])
    flash(f"Updated /u/{code}", "success")
    return redirect(url_for("tinyapp.urls_index"))


@bp.route("/urls/<code>/delete", methods=["POST", "DELETE"])
def urls_delete(code):
    require_user()
    if get_store().get(code) is not None:
        owned_link(code)
        get_store().delete(code)
        flash(f"Deleted /u/{code}", "success")
    return redirect(url_for("tinyapp.urls_index"))


@bp.get("/u/<code>")
def follow(code):
    visited = load_visited(session)
    link, first_visit = get_store().record_visit(code, visited)
    if first_visit:
        save_visited(session, visited)
    return redirect(link.destination_url, code=302)

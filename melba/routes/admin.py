from flask import Blueprint, current_app, flash, jsonify, redirect, render_template, request, url_for
from flask_login import current_user, login_user, logout_user
from werkzeug.exceptions import RequestEntityTooLarge

from ..errors import MelbaError, PersistenceFault
from ..models import Post
from ..services.content import (
    BLOG,
    EVENT,
    PROGRAM,
    create_content,
    delete_content,
    get_content,
    list_content,
    update_content,
)
from ..services.records import count_records, delete_record, get_record, list_records
from ..services.submission_kinds import SUBMISSION_KINDS, SubmissionKind
from ..utils.auth import AdminUser, admin_required, authenticate, no_cache
from ..utils.csrf import is_csrf_valid

bp = Blueprint("admin", __name__)

CONTENT_COLLECTIONS = {"posts": BLOG, "events": EVENT, "programs": PROGRAM}
_COLLECTION = "<any(posts, events, programs):collection>"


@bp.after_request
def _admin_no_cache(response):
    return no_cache(response)


@bp.errorhandler(MelbaError)
def _handle_melba_error(error: MelbaError):
    if isinstance(error, PersistenceFault):
        current_app.logger.error("[ADMIN] %s %s failed: %s", request.method, request.path, error)
    return jsonify(error.to_dict()), error.status_code


@bp.errorhandler(RequestEntityTooLarge)
def _handle_too_large(error):
    return jsonify({"success": False, "message": "Upload error: file too large."}), 413


def _safe_next(target: str | None) -> str | None:
    if target and target.startswith("/") and not target.startswith("//"):
        return target
    return None


@bp.route("/login", methods=["GET", "POST"])
def login():
    if current_user.is_authenticated:
        return redirect(url_for("admin.dashboard"))

    next_page = _safe_next(request.args.get("next") or request.form.get("next"))
    if request.method == "POST":
        if not is_csrf_valid(request.form.get("csrf_token")):
            flash("Your session expired. Please try again.", "error")
            return render_template("admin/login.html", next_page=next_page), 400

        username = (request.form.get("username") or "").strip()
        if authenticate(username, request.form.get("password")):
            login_user(AdminUser(username))
            return redirect(next_page or url_for("admin.dashboard"))
        flash("Invalid username or password.", "error")
        return render_template("admin/login.html", next_page=next_page), 401

    return render_template("admin/login.html", next_page=next_page)


@bp.route("/logout")
def logout():
    logout_user()
    flash("You have been logged out.", "success")
    return redirect(url_for("admin.login"))


@bp.route("/")
@bp.route("/dashboard")
@admin_required
def dashboard():
    submission_counts = [
        (kind, count_records(kind.model)) for kind in SUBMISSION_KINDS
    ]
    content_counts = {
        "posts": count_records(Post, type="blog"),
        "events": count_records(Post, type="event"),
        "programs": count_records(PROGRAM.model),
    }
    return render_template(
        "admin/dashboard.html",
        page_title="Dashboard",
        submission_counts=submission_counts,
        content_counts=content_counts,
    )


# --- Content API -----------------------------------------------------------


def _content_payload():
    if request.is_json:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}
    return request.form


@bp.get(f"/api/{_COLLECTION}")
@admin_required
def list_content_api(collection):
    kind = CONTENT_COLLECTIONS[collection]
    return jsonify([record.to_dict() for record in list_content(kind)])


@bp.get(f"/api/{_COLLECTION}/<record_id>")
@admin_required
def get_content_api(collection, record_id):
    kind = CONTENT_COLLECTIONS[collection]
    return jsonify(get_content(kind, record_id).to_dict())


@bp.post(f"/api/{_COLLECTION}")
@admin_required
def create_content_api(collection):
    kind = CONTENT_COLLECTIONS[collection]
    record = create_content(kind, _content_payload(), request.files.get("image"))
    return (
        jsonify(
            {
                "success": True,
                "message": f"{kind.label} created successfully!",
                kind.response_key: record.to_dict(),
            }
        ),
        201,
    )


@bp.put(f"/api/{_COLLECTION}/<record_id>")
@admin_required
def update_content_api(collection, record_id):
    kind = CONTENT_COLLECTIONS[collection]
    record = update_content(kind, record_id, _content_payload(), request.files.get("image"))
    return jsonify(
        {
            "success": True,
            "message": f"{kind.label} updated successfully!",
            kind.response_key: record.to_dict(),
        }
    )


@bp.delete(f"/api/{_COLLECTION}/<record_id>")
@admin_required
def delete_content_api(collection, record_id):
    kind = CONTENT_COLLECTIONS[collection]
    delete_content(kind, record_id)
    return jsonify({"success": True, "message": f"{kind.label} deleted successfully!"})


# --- Submission API --------------------------------------------------------


def _submission_views(kind: SubmissionKind):
    def list_view():
        return jsonify([record.to_dict() for record in list_records(kind.model, kind.order_by)])

    def detail_view(record_id):
        record = get_record(kind.model, record_id, kind.not_found_message)
        return jsonify(record.to_dict())

    def delete_view(record_id):
        delete_record(kind.model, record_id, kind.not_found_message)
        return jsonify({"success": True, "message": f"{kind.title} deleted successfully!"})

    for view, suffix in ((list_view, "list"), (detail_view, "detail"), (delete_view, "delete")):
        view.__name__ = f"{kind.endpoint}_{suffix}"
        view.__qualname__ = view.__name__
    return admin_required(list_view), admin_required(detail_view), admin_required(delete_view)


for _kind in SUBMISSION_KINDS:
    _list, _detail, _delete = _submission_views(_kind)
    _base = f"/api/{_kind.admin_path}"
    bp.add_url_rule(_base, view_func=_list, methods=["GET"])
    bp.add_url_rule(f"{_base}/<record_id>", view_func=_detail, methods=["GET"])
    bp.add_url_rule(f"{_base}/<record_id>", view_func=_delete, methods=["DELETE"])

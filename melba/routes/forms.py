"""Public form endpoints, one per registered submission kind."""

from flask import Blueprint, current_app, jsonify, redirect, request, url_for

from ..extensions import limiter
from ..services.submission_kinds import SUBMISSION_KINDS, SubmissionKind
from ..services.submissions import process_submission

bp = Blueprint("forms", __name__)


def _submission_limit() -> str:
    return current_app.config.get("SUBMISSION_RATE_LIMIT") or "10 per minute"


def _payload():
    if request.is_json:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}
    return request.form


def _prefers_redirect(kind: SubmissionKind) -> bool:
    """Plain HTML form posts get a redirect back to the page instead of JSON."""

    if not kind.redirect_endpoint or request.is_json:
        return False
    best = request.accept_mimetypes.best_match(["application/json", "text/html"])
    return best == "text/html"


def _make_view(kind: SubmissionKind):
    def submit():
        outcome = process_submission(kind, _payload())
        if _prefers_redirect(kind):
            flag = "success" if outcome.status == 200 else "error"
            return redirect(url_for(kind.redirect_endpoint, **{flag: 1}))
        return jsonify(outcome.body), outcome.status

    submit.__name__ = f"submit_{kind.endpoint}"
    submit.__qualname__ = submit.__name__
    return limiter.limit(_submission_limit, methods=["POST"])(submit)


for _kind in SUBMISSION_KINDS:
    _view = _make_view(_kind)
    for _path in _kind.public_paths:
        bp.add_url_rule(_path, endpoint=_kind.endpoint, view_func=_view, methods=["POST"])

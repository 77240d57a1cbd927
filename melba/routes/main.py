"""Public pages of the site."""

from datetime import datetime

from flask import Blueprint, abort, current_app, render_template, request, send_from_directory

from ..models import Post, Program
from ..services.content import BLOG, EVENT, PROGRAM, list_content
from ..services.records import find_record, list_records

bp = Blueprint("main", __name__)


def _upcoming_events(limit=None):
    events = list_records(Post, "event_date", type="event")
    now = datetime.utcnow()
    upcoming = [event for event in events if event.event_date and event.event_date >= now]
    return upcoming[:limit] if limit else upcoming


@bp.route("/")
def index():
    return render_template(
        "pages/index.html",
        page_title="Home",
        events=_upcoming_events(limit=3),
        posts=list_content(BLOG)[:3],
        programs=list_records(Program, "-created_at", status="Active")[:3],
    )


@bp.route("/about")
def about():
    return render_template("pages/about.html", page_title="About us")


@bp.route("/programs")
def programs():
    return render_template(
        "pages/programs.html", page_title="Programs", programs=list_content(PROGRAM)
    )


@bp.route("/programs/<slug>")
def program_detail(slug):
    program = find_record(Program, slug=slug)
    if program is None:
        abort(404)
    return render_template("pages/program_detail.html", page_title=program.title, program=program)


@bp.route("/events")
def events():
    all_events = list_content(EVENT)
    now = datetime.utcnow()
    return render_template(
        "pages/events.html",
        page_title="Events",
        upcoming=[e for e in all_events if e.event_date and e.event_date >= now],
        past=[e for e in reversed(all_events) if not e.event_date or e.event_date < now],
    )


@bp.route("/events/<slug>")
def event_detail(slug):
    event = find_record(Post, type="event", slug=slug)
    if event is None:
        abort(404)
    return render_template("pages/post_detail.html", page_title=event.title, post=event)


@bp.route("/blog")
def blog():
    return render_template("pages/blog.html", page_title="Blog", posts=list_content(BLOG))


@bp.route("/blog/<slug>")
def blog_detail(slug):
    post = find_record(Post, type="blog", slug=slug)
    if post is None:
        abort(404)
    return render_template("pages/post_detail.html", page_title=post.title, post=post)


@bp.route("/donate")
def donate():
    return render_template("pages/donate.html", page_title="Donate")


@bp.get("/contact")
def contact():
    return render_template(
        "pages/contact.html",
        page_title="Contact us",
        success=request.args.get("success") == "1",
        error=request.args.get("error") == "1",
    )


@bp.route("/uploads/<path:filename>")
def uploaded_file(filename):
    return send_from_directory(current_app.config["UPLOAD_FOLDER"], filename, max_age=60 * 60 * 24 * 7)

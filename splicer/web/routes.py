"""Editing API routes: one TimelineManager per session."""

import uuid
from fractions import Fraction

from flask import Blueprint, current_app, jsonify, request

from splicer.models import Interval, Selection, seconds
from splicer.segments import InvalidRange
from splicer.timeline import TimelineManager

bp = Blueprint("web", __name__)

# In-memory session store: session_id -> TimelineManager
_sessions: dict[str, TimelineManager] = {}


def _interval_json(iv: Interval | None) -> dict | None:
    if iv is None:
        return None
    return {"start": seconds(iv.start), "end": seconds(iv.end)}


def _state(timeline: TimelineManager) -> dict:
    state = timeline.state()
    state["source_duration"] = seconds(state["source_duration"])
    state["total_duration"] = seconds(state["total_duration"])
    state["segments"] = [[seconds(start), seconds(end)] for start, end in state["segments"]]
    return state


def _time(value, name: str) -> Fraction:
    """Exact seconds from a JSON number, read as the decimal it was written as."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"Field '{name}' must be a number")
    try:
        return Fraction(str(value))
    except (ValueError, ZeroDivisionError):
        raise ValueError(f"Field '{name}' must be a number") from None


def _number(data: dict, key: str) -> Fraction:
    if key not in data:
        raise ValueError(f"Missing field '{key}'")
    return _time(data[key], key)


def _query_time(name: str) -> Fraction | None:
    raw = request.args.get(name)
    if raw is None:
        return None
    try:
        return _time(raw, name)
    except ValueError:
        return None


@bp.route("/api/sessions", methods=["POST"])
def create_session():
    data = request.get_json(silent=True) or {}
    try:
        duration = _number(data, "source_duration")
        timeline = TimelineManager(max_depth=current_app.config["MAX_HISTORY_DEPTH"])
        timeline.initialize(duration)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    session_id = uuid.uuid4().hex[:12]
    _sessions[session_id] = timeline
    return jsonify({"session_id": session_id, **_state(timeline)}), 201


@bp.route("/api/sessions/<session_id>")
def get_session(session_id: str):
    if session_id not in _sessions:
        return jsonify({"error": "Session not found"}), 404
    return jsonify(_state(_sessions[session_id]))


@bp.route("/api/sessions/<session_id>", methods=["DELETE"])
def close_session(session_id: str):
    if _sessions.pop(session_id, None) is None:
        return jsonify({"error": "Session not found"}), 404
    return "", 204


@bp.route("/api/sessions/<session_id>/segments", methods=["PUT"])
def load_segments(session_id: str):
    if session_id not in _sessions:
        return jsonify({"error": "Session not found"}), 404

    data = request.get_json(silent=True) or {}
    timeline = _sessions[session_id]
    try:
        duration = _number(data, "source_duration")
        pairs = [
            (_time(start, "segments"), _time(end, "segments"))
            for start, end in data.get("segments", [])
        ]
        timeline.load(duration, pairs)
    except (TypeError, ValueError) as e:
        return jsonify({"error": str(e)}), 400
    return jsonify(_state(timeline))


@bp.route("/api/sessions/<session_id>/delete", methods=["POST"])
def delete_range(session_id: str):
    if session_id not in _sessions:
        return jsonify({"error": "Session not found"}), 404

    data = request.get_json(silent=True) or {}
    timeline = _sessions[session_id]
    try:
        selection = Selection(anchor=_number(data, "start"), cursor=_number(data, "end"))
        if not selection.is_valid:
            return jsonify({"error": "Selection is too short to delete"}), 400
        timeline.delete_segment(*selection.as_range())
    except InvalidRange as e:
        return jsonify({"error": str(e), "start": seconds(e.start), "end": seconds(e.end)}), 400
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify(_state(timeline))


@bp.route("/api/sessions/<session_id>/undo", methods=["POST"])
def undo(session_id: str):
    if session_id not in _sessions:
        return jsonify({"error": "Session not found"}), 404

    timeline = _sessions[session_id]
    changed = timeline.undo()
    return jsonify({"changed": changed, **_state(timeline)})


@bp.route("/api/sessions/<session_id>/redo", methods=["POST"])
def redo(session_id: str):
    if session_id not in _sessions:
        return jsonify({"error": "Session not found"}), 404

    timeline = _sessions[session_id]
    changed = timeline.redo()
    return jsonify({"changed": changed, **_state(timeline)})


@bp.route("/api/sessions/<session_id>/position")
def position(session_id: str):
    """Playback poll: where is this source time on the virtual timeline?"""
    if session_id not in _sessions:
        return jsonify({"error": "Session not found"}), 404

    source = _query_time("source")
    if source is None:
        return jsonify({"error": "Query parameter 'source' must be a number"}), 400

    timeline = _sessions[session_id]
    virtual = timeline.source_to_virtual(source)
    resp = {
        "virtual": seconds(virtual),
        "segment": _interval_json(timeline.segment_at_source(source)),
        "next_segment": None,
    }
    if virtual is None:
        resp["next_segment"] = _interval_json(timeline.next_segment_after(source))
    return jsonify(resp)


@bp.route("/api/sessions/<session_id>/source")
def source_time(session_id: str):
    if session_id not in _sessions:
        return jsonify({"error": "Session not found"}), 404

    virtual = _query_time("virtual")
    if virtual is None:
        return jsonify({"error": "Query parameter 'virtual' must be a number"}), 400

    timeline = _sessions[session_id]
    return jsonify({
        "source": seconds(timeline.virtual_to_source(virtual)),
        "segment": _interval_json(timeline.segment_at_virtual(virtual)),
    })

from __future__ import annotations

import io
from functools import wraps

from flask import Flask, abort, jsonify, request, send_file

from ..core.enums import AddOutcome, EntryList
from ..core.exceptions import ImportPayloadError, ValidationError
from ..container import Container

_ADD_STATUS = {
    AddOutcome.ADDED: 201,
    AddOutcome.DUPLICATE_DATE: 409,
    AddOutcome.ALL_DUPLICATES: 409,
    AddOutcome.LIMIT_EXCEEDED: 409,
    AddOutcome.INVALID_RANGE: 400,
    AddOutcome.INVALID_INPUT: 400,
}


def register(app: Flask, container: Container) -> None:
    tracker = container.tracker_service
    transfer = container.transfer_service

    def entry_list_required(view):
        @wraps(view)
        def wrapper(list_name: str, *args, **kwargs):
            try:
                kind = EntryList(list_name)
            except ValueError:
                abort(404)
            return view(kind, *args, **kwargs)

        return wrapper

    @app.errorhandler(404)
    def not_found(_):
        return jsonify({"success": False, "message": "Not found"}), 404

    @app.route("/api/state", methods=["GET"], endpoint="api_state")
    def api_state():
        return jsonify(tracker.snapshot(weekly_limit=container.weekly_overview_limit))

    @app.route("/api/<list_name>/entries", methods=["GET"], endpoint="api_entries")
    @entry_list_required
    def api_entries(kind: EntryList):
        return jsonify([e.to_dict() for e in tracker.entries(kind)])

    @app.route("/api/<list_name>/entries", methods=["POST"], endpoint="api_entries_add")
    @entry_list_required
    def api_entries_add(kind: EntryList):
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        if "from" in data or "to" in data:
            result = tracker.add_entry_range(kind, data.get("from"), data.get("to"), data)
        else:
            result = tracker.add_entry(kind, data.get("date"), data)
        return jsonify(result.to_dict()), _ADD_STATUS[result.outcome]

    @app.route("/api/<list_name>/entries/<int:entry_id>", methods=["DELETE"], endpoint="api_entries_delete")
    @entry_list_required
    def api_entries_delete(kind: EntryList, entry_id: int):
        if not tracker.delete_entry(kind, entry_id):
            return jsonify({"success": False, "message": f"Entry {entry_id} not found"}), 404
        return jsonify({"success": True})

    @app.route("/api/<list_name>/entries", methods=["DELETE"], endpoint="api_entries_clear")
    @entry_list_required
    def api_entries_clear(kind: EntryList):
        removed = tracker.clear_list(kind)
        return jsonify({"success": True, "removed": removed})

    @app.route("/api/settings", methods=["GET"], endpoint="api_settings")
    def api_settings():
        return jsonify(tracker.settings.to_dict())

    @app.route("/api/settings", methods=["PUT"], endpoint="api_settings_update")
    def api_settings_update():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"success": False, "message": "Expected a JSON object"}), 400
        try:
            settings = tracker.update_settings(data)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        return jsonify(settings.to_dict())

    @app.route("/api/summary/hours", methods=["GET"], endpoint="api_summary_hours")
    def api_summary_hours():
        currency = tracker.settings.currency.value
        return jsonify({name: t.to_dict(currency) for name, t in tracker.hours_summary().items()})

    @app.route("/api/summary/overtime", methods=["GET"], endpoint="api_summary_overtime")
    def api_summary_overtime():
        return jsonify(tracker.overtime_summary())

    @app.route("/api/summary/weekly", methods=["GET"], endpoint="api_summary_weekly")
    def api_summary_weekly():
        limit = request.args.get("limit", type=int)
        if limit is None:
            limit = container.weekly_overview_limit
        currency = tracker.settings.currency.value
        return jsonify([w.to_dict(currency) for w in tracker.weekly_overview(limit=limit)])

    @app.route("/api/export", methods=["GET"], endpoint="api_export")
    def api_export():
        now = tracker.now()
        buf = io.BytesIO(transfer.export_json(now=now).encode("utf-8"))
        return send_file(
            buf,
            mimetype="application/json",
            as_attachment=True,
            download_name=transfer.export_filename(now=now),
        )

    @app.route("/api/import", methods=["POST"], endpoint="api_import")
    def api_import():
        upload = request.files.get("file")
        raw = upload.read() if upload else request.get_data()
        try:
            summary = transfer.import_payload(raw)
        except ImportPayloadError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        return jsonify({"success": True, **summary.to_dict()})

    @app.route("/api/reset", methods=["POST"], endpoint="api_reset")
    def api_reset():
        tracker.reset_all()
        return jsonify({"success": True})

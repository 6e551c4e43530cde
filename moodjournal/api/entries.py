"""
Entries API routes for managing mood journal entries.
"""
import logging
from flask import Blueprint, current_app, request, jsonify
from marshmallow import EXCLUDE, Schema, fields, validate, ValidationError as SchemaError

from ..utils.errors import NoSelectionError, PersistenceError, ValidationError
from ..utils.mood import MOOD_LABELS, MOOD_MAX, MOOD_MIN

entries_bp = Blueprint('entries', __name__)
logger = logging.getLogger(__name__)


class EntrySchema(Schema):
    """Schema for validating entry creation data.

    Client-supplied ids, timestamps and affirmations are dropped; the server
    assigns those.
    """
    class Meta:
        unknown = EXCLUDE

    date = fields.String(load_default=None, validate=validate.Regexp(r"^\d{4}-\d{2}-\d{2}$"))
    moodValue = fields.Integer(required=True, validate=validate.Range(min=MOOD_MIN, max=MOOD_MAX))
    moodLabel = fields.String(load_default=None, validate=validate.OneOf(MOOD_LABELS))
    text = fields.String(required=True)


class AffirmationRequestSchema(Schema):
    """Schema for affirmation requests. Mood context is optional."""
    class Meta:
        unknown = EXCLUDE

    text = fields.String(load_default="")
    moodLabel = fields.String(load_default=None, validate=validate.OneOf(MOOD_LABELS))
    moodValue = fields.Integer(load_default=None, validate=validate.Range(min=MOOD_MIN, max=MOOD_MAX))


def _service():
    return current_app.entry_service


@entries_bp.route('/entries', methods=['GET'])
def get_entries():
    """Get all journal entries, newest first.

    Returns:
        JSON array of entries; empty when there are none.
    """
    try:
        entries = _service().list_entries()
    except PersistenceError as e:
        return jsonify({"error": e.message}), 500

    logger.info(f"Retrieved {len(entries)} entries")
    return jsonify(entries)


@entries_bp.route('/entries', methods=['POST'])
def create_entry():
    """Create a journal entry and generate its affirmation."""
    try:
        data = EntrySchema().load(request.get_json(silent=True) or {})
    except SchemaError as e:
        logger.warning(f"Validation error: {e.messages}")
        return jsonify({"error": "Validation failed", "details": e.messages}), 400

    try:
        entry = _service().submit(
            data["text"],
            data["moodValue"],
            mood_label=data.get("moodLabel"),
            date=data.get("date"),
        )
    except ValidationError as e:
        logger.warning(f"Entry rejected: {e.message}")
        return jsonify({"error": e.message}), 400
    except PersistenceError as e:
        return jsonify({"error": e.message}), 500

    return jsonify({
        "success": True,
        "entry": entry
    }), 201


@entries_bp.route('/entries/<entry_id>', methods=['GET'])
def get_entry(entry_id):
    """Get a specific journal entry.

    Args:
        entry_id: ID of the entry to retrieve.
    """
    try:
        entry = _service().get_entry(entry_id)
    except NoSelectionError as e:
        return jsonify({"error": e.message}), 400
    except PersistenceError as e:
        return jsonify({"error": e.message}), 500

    if not entry:
        logger.warning(f"Entry {entry_id} not found")
        return jsonify({"error": "Entry not found"}), 404
    return jsonify(entry)


@entries_bp.route('/entries/<entry_id>', methods=['DELETE'])
def delete_entry(entry_id):
    """Delete a specific journal entry.

    Args:
        entry_id: ID of the entry to delete.

    Returns:
        200 when deleted, 404 when no entry has that id.
    """
    try:
        deleted = _service().delete(entry_id)
    except NoSelectionError as e:
        return jsonify({"error": e.message}), 400
    except PersistenceError as e:
        return jsonify({"error": e.message}), 500

    if not deleted:
        return jsonify({"error": "Entry not found"}), 404
    return jsonify({"success": True, "message": "Entry deleted"}), 200


@entries_bp.route('/generate-affirmation', methods=['POST'])
def generate_affirmation():
    """Generate an affirmation for a piece of text.

    Always answers 200 with an affirmation; remote generation failures fall
    back to local affirmations.
    """
    try:
        data = AffirmationRequestSchema().load(request.get_json(silent=True) or {})
    except SchemaError as e:
        logger.warning(f"Ignoring invalid mood context: {e.messages}")
        payload = request.get_json(silent=True) or {}
        text = payload.get("text") if isinstance(payload, dict) else None
        data = {"text": text if isinstance(text, str) else ""}

    affirmation = _service().generate_affirmation(
        data.get("text"),
        mood_label=data.get("moodLabel"),
        mood_value=data.get("moodValue"),
    )
    return jsonify({"affirmation": affirmation})

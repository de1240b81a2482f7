from __future__ import annotations

import logging

from flask import jsonify

from ..core.exceptions import DomainError, FetchFailed, ValidationError

logger = logging.getLogger(__name__)


def error_response(e: Exception):
    """Explicit error value for the API; a failed report never crashes the app."""
    if isinstance(e, ValidationError):
        return jsonify({"success": False, "kind": type(e).__name__, "error": str(e)}), 400
    if isinstance(e, FetchFailed):
        return jsonify({"success": False, "kind": "FetchFailed", "error": str(e)}), 502
    if isinstance(e, DomainError):
        return jsonify({"success": False, "kind": type(e).__name__, "error": str(e)}), 422

    logger.exception("Unexpected error")
    return jsonify({"success": False, "kind": "InternalError", "error": "Error interno del sistema"}), 500

"""JSON endpoints for smart links, metadata lookup and pre-saves."""

from typing import TYPE_CHECKING, Any

from flask import Blueprint, current_app, jsonify, request

from fanlink import __version__
from fanlink.application.use_cases import (
    FetchMetadataCommand,
    GenerateLinkCommand,
    GeneratePreSaveLinksCommand,
)
from fanlink.config import get_logger
from fanlink.domain.errors import (
    ConfigurationError,
    TrackNotFoundError,
    ValidationError,
)

if TYPE_CHECKING:
    from fanlink.infrastructure.container import ServiceContainer

logger = get_logger(__name__)
resolver_bp = Blueprint("resolver", __name__)


def _container() -> "ServiceContainer":
    return current_app.extensions["fanlink"]


def _json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@resolver_bp.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok", "version": __version__})


@resolver_bp.route("/generate-link", methods=["POST"])
async def generate_link():
    """Resolve one input to a smart link with streaming URLs and a score."""
    data = _json_body()
    try:
        command = GenerateLinkCommand(input=data.get("input"))  # type: ignore[arg-type]
        result = await _container().generate_link().execute(command)
    except ValidationError as e:
        return jsonify({"error": e.message}), 400
    except TrackNotFoundError as e:
        return jsonify({"error": e.message, "suggestions": e.suggestions}), 404
    except ConfigurationError as e:
        return jsonify({"error": e.message}), 500
    except Exception as e:
        logger.exception("Link generation failed")
        return jsonify({"error": "Failed to generate link", "details": str(e)}), 500
    return jsonify(result.as_dict())


@resolver_bp.route("/fetch-music-metadata", methods=["POST"])
async def fetch_music_metadata():
    """Resolve one input to form-ready metadata and per-platform URLs."""
    data = _json_body()
    try:
        command = FetchMetadataCommand(
            input=data.get("input"),  # type: ignore[arg-type]
            type_hint=data.get("type"),
        )
        result = await _container().fetch_metadata().execute(command)
    except ValidationError as e:
        return jsonify({"error": e.message}), 400
    except TrackNotFoundError as e:
        return jsonify({"error": e.message, "metadata": None}), 404
    except Exception as e:
        logger.exception("Metadata lookup failed")
        return jsonify({"error": "Failed to fetch metadata", "details": str(e)}), 500
    return jsonify(result.as_dict())


@resolver_bp.route("/generate-presave-links", methods=["POST"])
async def generate_presave_links():
    data = _json_body()
    container = _container()
    try:
        command = GeneratePreSaveLinksCommand(
            upc=data.get("upc"),
            artist=data.get("artist"),
            title=data.get("title"),
            release_date=data.get("releaseDate"),
            upc_bounds=container.presave_upc_bounds,
        )
        result = await container.presave_links().execute(command)
    except ValidationError as e:
        return jsonify({"error": e.message}), 400
    except Exception as e:
        logger.exception("Pre-save link generation failed")
        return (
            jsonify({"error": "Failed to generate pre-save links", "details": str(e)}),
            500,
        )
    return jsonify(result.as_dict())


@resolver_bp.route("/auto-resolve-presaves", methods=["POST"])
async def auto_resolve_presaves():
    """Batch job: flip due pre-saves to released once Spotify has them."""
    try:
        async with _container().auto_resolve() as use_case:
            report = await use_case.execute()
    except Exception as e:
        return jsonify({"success": False, "error": str(e)}), 500
    return jsonify(report.as_dict())

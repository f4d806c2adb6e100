"""
Matcher API for Resumes -> Job Description
------------------------------------------

Thin Flask wrapper around the ranker package so the upload/dashboard side
can call the engine over HTTP. No storage or auth lives here: callers send
plain text and get scores and metadata back.

Endpoints:
    POST /rank
        Input:  { "job_description": "...",
                  "resumes": [{"id": "r1", "text": "..."}, ...],
                  "top_n": 10,                     (optional)
                  "extract_requirements": true }   (optional, default true)
        Output: { "results": [{"candidate_id": "r1", "score": 61.23,
                               "matched_terms": ["react", ...], "rank": 1}, ...],
                  "total_processed": 1 }

    POST /resumes/extract
        Input:  { "text": "..." }
        Output: { "name": ..., "email": ..., "skills": [...], "text": "..." }

    POST /jobs/extract
        Input:  { "description": "..." }
        Output: { "requirements": "..." }

    GET /health
        Output: { "ok": true }

    GET /debug/skills
        Output: { "count": 55, "sample": [...] }
"""

import logging

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from ranker.config import settings
from ranker.metadata import extract_metadata, skill_labels
from ranker.pipeline import InvalidInput, rank_candidates, rank_job

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# === Set up Flask app ===
app = Flask(__name__)
CORS(app)  # Allow requests from the dashboard frontend (CORS enabled)


# --- Error handlers (always return JSON) ---


@app.errorhandler(InvalidInput)
def handle_invalid_input(e: InvalidInput):
    return jsonify({"error": e.reason, "code": 400, "type": "InvalidInput"}), 400


@app.errorhandler(HTTPException)
def handle_http_exception(e: HTTPException):
    """Render abort(...) and friends as JSON instead of HTML pages."""
    return jsonify({"error": e.description or str(e), "code": e.code, "type": e.name}), e.code


@app.errorhandler(Exception)
def handle_unexpected_exception(e: Exception):
    """
    Catch-all for any unhandled exception and return JSON 500.
    This keeps HTML error pages away from the dashboard.
    """
    # full traceback goes to the server log
    logger.exception("Unhandled error on %s %s", request.method, request.path)
    return (
        jsonify(
            {
                "error": "Internal server error",
                "code": 500,
                "details": str(e),
            }
        ),
        500,
    )


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@app.route("/rank", methods=["POST"])
def rank():
    """Rank resumes against a job description."""
    data = _json_body()
    jd = data.get("job_description") or ""
    resumes = data.get("resumes") or []
    top_n = data.get("top_n")

    if top_n is not None and (not isinstance(top_n, int) or isinstance(top_n, bool) or top_n < 0):
        raise InvalidInput("top_n must be a non-negative integer")
    if not isinstance(resumes, list):
        raise InvalidInput("resumes must be a list")

    if data.get("extract_requirements", True):
        results = rank_job(jd, resumes, top_n=top_n)
    else:
        results = rank_candidates(jd, resumes, top_n=top_n)

    return jsonify(
        {
            "results": [r.to_dict() for r in results],
            "total_processed": len(results),
        }
    )


@app.route("/resumes/extract", methods=["POST"])
def resumes_extract():
    """
    Name, email and skills from resume text.
    Empty text is fine and just gives empty metadata.
    """
    text = _json_body().get("text") or ""
    return jsonify(extract_metadata(text, profile="resume").to_dict())


@app.route("/jobs/extract", methods=["POST"])
def jobs_extract():
    description = _json_body().get("description") or ""
    return jsonify(extract_metadata(description, profile="job").to_dict())


@app.route("/debug/skills", methods=["GET"])
def debug_skills():
    # quick look at which skill vocabulary got loaded
    labels = skill_labels()
    return jsonify({"count": len(labels), "sample": labels[:20]})


@app.route("/health", methods=["GET"])
def health():
    return jsonify({"ok": True})


# === Run the server ===
if __name__ == "__main__":
    # Debug=True enables live reload + error traces (dev only, not for production).
    logger.info("Matcher API listening on http://127.0.0.1:%d", settings.port)
    app.run(debug=True, port=settings.port)

# budget_backend/assistant.py

import logging

from flask import Blueprint, current_app, request, jsonify
from flask_jwt_extended import jwt_required
from openai import OpenAI

logger = logging.getLogger(__name__)

assistant_bp = Blueprint("assistant", __name__, url_prefix="/api")


class EmptyPrompt(ValueError):
    pass


class AIRequestError(Exception):
    """The upstream completion call failed."""


def ask(prompt, client=None, model="gpt-3.5-turbo", api_key=None):
    """
    Send `prompt` as a single user message and return the first choice's text.

    The prompt is checked before a client is created, so an empty prompt never
    reaches the upstream API.
    """
    if not isinstance(prompt, str) or not prompt.strip():
        raise EmptyPrompt("Prompt is required")

    try:
        if client is None:
            client = OpenAI(api_key=api_key)
        completion = client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
        )
        return completion.choices[0].message.content
    except Exception as e:
        raise AIRequestError(str(e)) from e


@assistant_bp.route("/ai", methods=["POST"])
@jwt_required()
def ai_reply():
    data = request.get_json(silent=True) or {}
    prompt = data.get("prompt") if isinstance(data, dict) else None

    try:
        reply = ask(
            prompt,
            model=current_app.config["OPENAI_MODEL"],
            api_key=current_app.config.get("OPENAI_API_KEY"),
        )
    except EmptyPrompt:
        return jsonify({"error": "Prompt is required"}), 400
    except AIRequestError:
        logger.exception("OpenAI error")
        return jsonify({"error": "AI request failed"}), 500

    return jsonify({"reply": reply})

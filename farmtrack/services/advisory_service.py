"""
Advisory Service — AI-generated farming advice.

Builds a prompt from whatever the caller supplied (field id, crop id,
free-text context), sends it to Groq (Llama 3) and stores the reply as a
new Advisory. The model output is stored as-is; nothing is interpreted.

Unlike the template fallbacks used elsewhere, a provider failure here is
surfaced to the caller and no row is written.
"""

import logging

import httpx
from flask import current_app
from groq import Groq

from farmtrack.database.db import db
from farmtrack.database.models import Advisory

logger = logging.getLogger('farmtrack.advisory')

ADVISORY_TITLE = 'AI Advisory'
EMPTY_COMPLETION_TEXT = 'No advice generated.'


class AdvisoryGenerationError(Exception):
    """The completion provider failed or could not be reached."""


def build_prompt(field_id=None, crop_id=None, context=None):
    """Interpolate the caller-supplied identifiers and context into one prompt."""
    lines = [
        "You are an expert agricultural advisor.",
        "Provide actionable farming advice based on the following context:",
    ]
    if context:
        lines.append(f"Context: {context}")
    if field_id is not None:
        lines.append(f"Field ID: {field_id}")
    if crop_id is not None:
        lines.append(f"Crop ID: {crop_id}")
    lines.append("")
    lines.append("Focus on practical steps for sowing, irrigation, pest control, or harvest.")
    lines.append("Keep it concise and relevant to the crop cycle stage.")
    return "\n".join(lines)


def request_completion(prompt):
    """
    Send one prompt to Groq and return the reply text (possibly empty).
    Raises AdvisoryGenerationError on any provider or transport failure.
    """
    config = current_app.config
    api_key = config.get('GROQ_API_KEY')
    if not api_key:
        raise AdvisoryGenerationError("GROQ_API_KEY is not configured")

    client = Groq(
        api_key=api_key,
        timeout=httpx.Timeout(config['GROQ_TIMEOUT_SECONDS'], connect=5.0),
        max_retries=0,
    )
    try:
        response = client.chat.completions.create(
            model=config['GROQ_MODEL'],
            messages=[{"role": "user", "content": prompt}],
            max_tokens=config['ADVISORY_MAX_TOKENS'],
        )
    except Exception as e:
        raise AdvisoryGenerationError(f"{type(e).__name__}: {e}") from e

    if not response.choices:
        return ''
    return (response.choices[0].message.content or '').strip()


class AdvisoryService:

    @staticmethod
    def list_advisories(user_id, field_id=None, crop_id=None):
        query = Advisory.query.filter_by(user_id=user_id)
        if field_id is not None:
            query = query.filter(Advisory.field_id == field_id)
        if crop_id is not None:
            query = query.filter(Advisory.crop_id == crop_id)
        return query.order_by(Advisory.generated_at.desc(), Advisory.id.desc()).all()

    @staticmethod
    def create_advisory(user_id, data):
        advisory = Advisory(
            user_id=user_id,
            field_id=data.get('field_id'),
            crop_id=data.get('crop_id'),
            title=data['title'],
            content=data['content'],
            is_read=data.get('is_read', False),
        )
        db.session.add(advisory)
        db.session.commit()
        return advisory

    @staticmethod
    def generate(user_id, field_id=None, crop_id=None, context=None):
        """Ask the provider for advice and persist exactly one Advisory on success."""
        prompt = build_prompt(field_id, crop_id, context)
        content = request_completion(prompt)
        if not content:
            logger.warning("Groq returned an empty completion, storing placeholder text")
            content = EMPTY_COMPLETION_TEXT

        return AdvisoryService.create_advisory(user_id, {
            'field_id': field_id,
            'crop_id': crop_id,
            'title': ADVISORY_TITLE,
            'content': content,
            'is_read': False,
        })

"""Client for the remote emotion classification service shown on the demo page."""

from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any, List

from .config import DEFAULT_ENDPOINT
from .errors import AnalysisError

logger = logging.getLogger(__name__)

EMOTION_EMOJIS = {
    "joy": "😊",
    "sadness": "😢",
    "anger": "😠",
    "fear": "😨",
    "surprise": "😲",
    "disgust": "🤢",
    "neutral": "😐",
}

EMOTION_DESCRIPTIONS = {
    "joy": "Feeling happy and delighted",
    "sadness": "Feeling down or melancholic",
    "anger": "Feeling frustrated or upset",
    "fear": "Feeling anxious or worried",
    "surprise": "Feeling amazed or astonished",
    "disgust": "Feeling repulsed or averse",
    "neutral": "Calm and balanced tone",
}

_STATUS_MESSAGES = {
    429: "Rate limit exceeded. Please wait a moment and try again (30 requests/minute).",
    404: (
        "API endpoint not found. The Hugging Face Space may be sleeping or unavailable. "
        "Please try again in a few moments."
    ),
    405: "Method not allowed. Please ensure the request is using POST.",
}


@dataclass(frozen=True)
class EmotionScore:
    emotion: str
    score: float


@dataclass(frozen=True)
class AnalysisResult:
    primary_emotion: str
    confidence: float
    all_emotions: tuple[EmotionScore, ...]

    def ranked(self) -> List[EmotionScore]:
        return sorted(self.all_emotions, key=lambda item: item.score, reverse=True)


def emoji_for(emotion: str) -> str:
    return EMOTION_EMOJIS.get(emotion, "🤔")


def describe(emotion: str) -> str:
    return EMOTION_DESCRIPTIONS.get(emotion, "Detected emotion")


def analyze_emotion(text: str, *, endpoint: str = DEFAULT_ENDPOINT, timeout: float = 30.0) -> AnalysisResult:
    """POST ``text`` to the analysis endpoint and return the parsed result.

    Every failure, including transport errors, surfaces as AnalysisError with
    a message suitable for showing to the user.
    """
    if not text or not text.strip():
        raise AnalysisError("Please enter some text to analyze")

    req = urllib.request.Request(
        endpoint,
        data=json.dumps({"text": text}).encode("utf-8"),
        headers={"Content-Type": "application/json", "Accept": "application/json"},
        method="POST",
    )
    logger.debug("POST %s (%d chars)", endpoint, len(text))

    try:
        with urllib.request.urlopen(req, timeout=float(timeout)) as resp:
            status = resp.status
            content_type = resp.headers.get("Content-Type") or ""
            body = resp.read()
    except urllib.error.HTTPError as e:
        message = _STATUS_MESSAGES.get(e.code, f"Analysis failed with status: {e.code}")
        raise AnalysisError(message, status=e.code) from e
    except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
        raise AnalysisError("Network error. Please check your internet connection.") from e

    logger.debug("Analysis response status %s, content type %r", status, content_type)
    if status < 200 or status >= 300:
        raise AnalysisError(_STATUS_MESSAGES.get(status, f"Analysis failed with status: {status}"), status=status)
    if "application/json" not in content_type:
        raise AnalysisError(
            "The API returned an invalid response. The Hugging Face Space may be starting up. "
            "Please try again in a few moments.",
            status=status,
        )

    try:
        payload = json.loads(body.decode("utf-8"))
    except ValueError as e:
        raise AnalysisError(f"Could not decode analysis response: {e}", status=status) from e
    return parse_result(payload)


def parse_result(payload: Any) -> AnalysisResult:
    if not isinstance(payload, dict):
        raise AnalysisError("Analysis response must be a JSON object.")
    try:
        primary = str(payload["primary_emotion"])
        confidence = float(payload["confidence"])
        scores = tuple(
            EmotionScore(emotion=str(item["emotion"]), score=float(item["score"]))
            for item in payload.get("all_emotions") or []
        )
    except (KeyError, TypeError, ValueError) as e:
        raise AnalysisError(f"Malformed analysis response: {e}") from e
    return AnalysisResult(primary_emotion=primary, confidence=confidence, all_emotions=scores)


def format_result(result: AnalysisResult) -> str:
    lines = [
        f"{emoji_for(result.primary_emotion)} {result.primary_emotion} "
        f"({result.confidence * 100:.1f}%) - {describe(result.primary_emotion)}"
    ]
    for item in result.ranked():
        lines.append(f"  {emoji_for(item.emotion)} {item.emotion:<10} {item.score * 100:5.1f}%")
    return "\n".join(lines)

"""
Gemini API integration: clothing recognition and mood-driven outfit recommendations.

Every failure (missing key, transport error, bad status, unparsable or
malformed payload) surfaces as CollaboratorFailure. Nothing here touches the
wardrobe store; callers decide what to do with the results.
"""
import asyncio
import json
import logging
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pydantic
import requests

from ecowardrobe.config import settings
from ecowardrobe.core.exceptions import CollaboratorFailure
from ecowardrobe.schemas import AnalysisResult, Category, Item, Recommendation, StyleMood
from ecowardrobe.utils.profiler import Profiler

logger = logging.getLogger(__name__)

SERVICE_NAME = "Gemini"
GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

PERSONALIZED_OUTFITS = 3
TRY_ON_OUTFITS = 2

ANALYSIS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "name": {"type": "STRING"},
        "category": {"type": "STRING", "enum": [c.value for c in Category]},
        "color": {"type": "STRING"},
        "material": {"type": "STRING"},
        "texture": {"type": "STRING"},
        "vibe": {"type": "STRING"},
        "tags": {"type": "ARRAY", "items": {"type": "STRING"}},
        "material_score": {"type": "NUMBER"},
        "sustainability_tip": {"type": "STRING"},
    },
    "required": [
        "name", "category", "color", "material", "texture",
        "vibe", "tags", "material_score", "sustainability_tip",
    ],
}

RECOMMENDATIONS_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "id": {"type": "STRING"},
            "title": {"type": "STRING"},
            "description": {"type": "STRING"},
            "item_ids": {"type": "ARRAY", "items": {"type": "STRING"}},
            "vibe_alignment": {"type": "STRING"},
            "sustainability_note": {"type": "STRING"},
        },
        "required": ["id", "title", "description", "item_ids", "vibe_alignment", "sustainability_note"],
    },
}


def split_data_url(image_data: str) -> Tuple[str, str]:
    """
    Split a data URL into (mime_type, base64 payload).
    Raw base64 is passed through as image/jpeg.
    """
    match = re.match(r"data:(image/[^;]+);base64,(.+)", image_data, re.DOTALL)
    if match:
        return match.group(1), match.group(2)
    if image_data.startswith("data:"):
        raise CollaboratorFailure(SERVICE_NAME, "image must be a base64 data URL")
    return "image/jpeg", image_data


def format_inventory(items: Sequence[Item], include_wear: bool = True) -> str:
    """One line per item, compact enough for large closets"""
    lines = []
    for it in items:
        line = f"- [ID: {it.id}] {it.name} (Texture: {it.texture}, Vibe: {it.vibe}"
        if include_wear:
            line += f", Worn: {it.times_worn}"
        lines.append(line + ")")
    return "\n".join(lines)


def build_analysis_prompt() -> str:
    categories = ", ".join(c.value for c in Category)
    return f"""Analyze this clothing item for a gender-neutral digital wardrobe.
Focus on TEXTURE (tactile feel) and VIBE (atmosphere/aesthetic). Respond in JSON.

Constraints:
- category: one of {categories}
- material_score: 1-100 based on the ecological impact of the material (100 = lowest impact)
- texture: how it feels, e.g. 'heavy-knit', 'sheer-flowing', 'stiff-utilitarian'
- vibe: the atmosphere, e.g. 'minimalist-industrial', 'earthy-bohemian', 'sharp-editorial'
- sustainability_tip: one sentence of care or sourcing advice"""


def build_mood_prompt(mood: StyleMood, inventory: Sequence[Item], count: int = PERSONALIZED_OUTFITS) -> str:
    keywords = ", ".join(mood.keywords)
    return f"""User Style Identity: "{mood.name}"
The user's own definition of this mood: "{mood.description}"
Keywords: {keywords}

Current Wardrobe:
{format_inventory(inventory)}

Task: Suggest {count} outfits that strictly align with the user's PERSONAL definition of this mood.
Focus on matching TEXTURES and ATMOSPHERE.
Explain "vibe_alignment" through how the textures complement each other.
Avoid gendered language. Use ONLY the item IDs listed above."""


def build_try_on_prompt(analysis: AnalysisResult, inventory: Sequence[Item], count: int = TRY_ON_OUTFITS) -> str:
    return f"""Considering a new item: {analysis.name} (Texture: {analysis.texture}, Vibe: {analysis.vibe}).
Current Closet:
{format_inventory(inventory, include_wear=False)}

Show how this item integrates into the user's current aesthetic. Focus on "Atmospheric Synergy":
how the new texture interacts with the existing ones.
Avoid gendered terms. Use ONLY the item IDs listed above. Return {count} outfit ideas."""


def extract_json_from_response(text: str) -> Optional[Any]:
    """
    Extract and parse JSON from a Gemini response.
    Handles pure JSON, markdown code blocks, or JSON embedded in text.

    Returns:
        Parsed JSON (object or array) or None if parsing fails
    """
    # Try direct JSON parse first (for structured output)
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    # Try extracting from markdown code blocks
    block = re.search(r"```(?:json)?\s*([\[{].*[\]}])\s*```", text, re.DOTALL)
    if block:
        try:
            return json.loads(block.group(1))
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse JSON from code block: {e}")

    # Bracket matching from the first opening brace/bracket
    starts = [i for i in (text.find("{"), text.find("[")) if i != -1]
    if starts:
        start_idx = min(starts)
        opener = text[start_idx]
        closer = "}" if opener == "{" else "]"
        depth = 0
        for i in range(start_idx, len(text)):
            if text[i] == opener:
                depth += 1
            elif text[i] == closer:
                depth -= 1
                if depth == 0:
                    try:
                        return json.loads(text[start_idx:i + 1])
                    except json.JSONDecodeError as e:
                        logger.warning(f"Failed to parse JSON from bracket-matched text: {e}")
                    break

    logger.error(f"Failed to extract valid JSON from Gemini response. Response text: {text[:500]}")
    return None


def _response_text(result: Any) -> Optional[str]:
    if not isinstance(result, dict):
        return None
    candidates = result.get("candidates") or []
    if not candidates:
        return None
    parts = (candidates[0].get("content") or {}).get("parts") or []
    if not parts or "text" not in parts[0]:
        return None
    return parts[0]["text"].strip()


class GeminiStylist:
    """Client for the recognition and recommendation calls"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        recognition_model: str = settings.GEMINI_RECOGNITION_MODEL,
        recommendation_model: str = settings.GEMINI_RECOMMENDATION_MODEL,
        timeout: float = settings.GEMINI_TIMEOUT,
        profiler: Optional[Profiler] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.recognition_model = recognition_model
        self.recommendation_model = recommendation_model
        self.timeout = timeout
        self.profiler = profiler or Profiler()

    async def identify_clothing_item(self, image_data: str) -> AnalysisResult:
        """
        Analyze a clothing photo into structured attributes.

        Args:
            image_data: Base64 data URL (or raw base64 JPEG) of the photo

        Raises:
            CollaboratorFailure: the call failed or the payload did not match AnalysisResult
        """
        mime_type, base64_data = split_data_url(image_data)
        parts = [
            {"text": build_analysis_prompt()},
            {"inline_data": {"mime_type": mime_type, "data": base64_data}},
        ]
        parsed = await self._generate(self.recognition_model, parts, ANALYSIS_SCHEMA, "gemini_identify_item")
        if not isinstance(parsed, dict):
            raise CollaboratorFailure(SERVICE_NAME, "analysis is not a JSON object")
        try:
            return AnalysisResult.model_validate(parsed)
        except pydantic.ValidationError as e:
            logger.error(f"Malformed analysis from Gemini: {e}")
            raise CollaboratorFailure(SERVICE_NAME, "analysis did not match the expected attributes") from e

    async def personalized_recommendations(
        self, mood: StyleMood, inventory: Sequence[Item]
    ) -> List[Recommendation]:
        """Outfit ideas from the closet that fit one style mood"""
        prompt = build_mood_prompt(mood, inventory)
        parsed = await self._generate(
            self.recommendation_model, [{"text": prompt}], RECOMMENDATIONS_SCHEMA, "gemini_mood_recommendations"
        )
        return self._parse_recommendations(parsed, PERSONALIZED_OUTFITS)

    async def try_on_recommendations(
        self, analysis: AnalysisResult, inventory: Sequence[Item]
    ) -> List[Recommendation]:
        """Outfit ideas combining a just-analyzed item with the closet"""
        prompt = build_try_on_prompt(analysis, inventory)
        parsed = await self._generate(
            self.recommendation_model, [{"text": prompt}], RECOMMENDATIONS_SCHEMA, "gemini_try_on_recommendations"
        )
        return self._parse_recommendations(parsed, TRY_ON_OUTFITS)

    def _parse_recommendations(self, parsed: Any, limit: int) -> List[Recommendation]:
        if isinstance(parsed, dict):
            parsed = parsed.get("recommendations") or parsed.get("outfits")
        if not isinstance(parsed, list):
            raise CollaboratorFailure(SERVICE_NAME, "recommendations are not a JSON array")
        try:
            return [Recommendation.model_validate(rec) for rec in parsed[:limit]]
        except pydantic.ValidationError as e:
            logger.error(f"Malformed recommendation from Gemini: {e}")
            raise CollaboratorFailure(SERVICE_NAME, "recommendation did not match the expected fields") from e

    async def _generate(
        self, model: str, parts: List[Dict[str, Any]], response_schema: Dict[str, Any], operation: str
    ) -> Any:
        if not self.api_key:
            logger.error("GEMINI_API_KEY not set.")
            raise CollaboratorFailure(SERVICE_NAME, "GEMINI_API_KEY is not configured")

        payload = {
            "contents": [{"parts": parts}],
            "generationConfig": {
                "temperature": 0.4,
                "responseMimeType": "application/json",
                "responseSchema": response_schema,
            },
        }

        logger.info(f"Calling Gemini {model} for {operation}")
        try:
            with self.profiler.measure(operation):
                response = await asyncio.to_thread(
                    requests.post,
                    GEMINI_URL.format(model=model),
                    params={"key": self.api_key},
                    headers={"Content-Type": "application/json"},
                    json=payload,
                    timeout=self.timeout,
                )
        except requests.RequestException as e:
            logger.error(f"Gemini request failed: {e}")
            raise CollaboratorFailure(SERVICE_NAME, f"request failed: {type(e).__name__}") from e

        if response.status_code != 200:
            logger.error(f"Gemini API error: {response.status_code} {response.text[:500]}")
            raise CollaboratorFailure(SERVICE_NAME, f"HTTP {response.status_code}")

        try:
            result = response.json()
        except ValueError as e:
            raise CollaboratorFailure(SERVICE_NAME, "response body is not JSON") from e

        text = _response_text(result)
        if text is None:
            logger.error(f"No candidates in Gemini response. Full response: {json.dumps(result)[:500]}")
            raise CollaboratorFailure(SERVICE_NAME, "empty response")

        parsed = extract_json_from_response(text)
        if parsed is None:
            raise CollaboratorFailure(SERVICE_NAME, "response text is not valid JSON")
        return parsed

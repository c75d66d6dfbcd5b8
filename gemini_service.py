import base64
import json
import logging
import re
from typing import List, Optional
from google import genai
from google.genai import types
from pydantic import ValidationError

from api.error_utils import UpstreamServiceError
from api.prompts import DESCRIPTION_PROMPT, STRUCTURED_CLASSIFICATION_PROMPT, QUIZ_IMAGE_PROMPT, QUIZ_QUESTIONS_PROMPT
from api.pydantic_models import StructuredClassification, GeneratedQuestion

logger = logging.getLogger(__name__)


def extract_json(raw_text: str, context: str = "Gemini response"):
    """
    Parse a JSON object or array out of a model answer.
    Tries, in order: the text with markdown fences stripped, a regex extraction
    of the outermost JSON value, and trimming everything outside the outer brackets.
    Raises UpstreamServiceError when nothing parses.
    """
    if not raw_text or not raw_text.strip():
        raise UpstreamServiceError("Gemini devolvió una respuesta vacía.", details=f"Empty {context}")

    cleaned = raw_text.strip()
    if cleaned.startswith("```json") and cleaned.endswith("```"):
        cleaned = cleaned.removeprefix("```json").removesuffix("```").strip()
    elif cleaned.startswith("```") and cleaned.endswith("```"):
        cleaned = cleaned.removeprefix("```").removesuffix("```").strip()

    parse_attempts = []

    # Attempt 1: direct parse of the cleaned string
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        parse_attempts.append(f"Direct parse failed: {e}")

    # Attempt 2: regex for the outermost object or array
    json_match = re.search(r'(\{[\s\S]*\}|\[[\s\S]*\])', raw_text)
    if json_match:
        try:
            result = json.loads(json_match.group(0))
            logger.info(f"JSON parsing succeeded via regex fallback for {context}")
            return result
        except json.JSONDecodeError as e:
            parse_attempts.append(f"Regex fallback failed: {e}")

    # Attempt 3: drop anything before the first and after the last bracket
    starts = [i for i in (cleaned.find('{'), cleaned.find('[')) if i >= 0]
    end = max(cleaned.rfind('}'), cleaned.rfind(']'))
    if starts and end > min(starts):
        try:
            result = json.loads(cleaned[min(starts):end + 1])
            logger.info(f"JSON parsing succeeded via format fixing for {context}")
            return result
        except json.JSONDecodeError as e:
            parse_attempts.append(f"Format fixing failed: {e}")

    logger.error(f"All JSON parsing attempts failed for {context}. Attempts: {parse_attempts}. Raw response (first 500 chars): {raw_text[:500]}")
    raise UpstreamServiceError(
        "No se pudo interpretar la respuesta de Gemini como JSON.",
        details=raw_text[:500]
    )


class GeminiService:
    """Thin wrapper over the google-genai client for every call EcoScan makes."""

    def __init__(self, api_key: str, text_model: str = "gemini-2.5-flash",
                 image_model: str = "gemini-2.5-flash-image", client=None):
        self.api_key = api_key
        self.text_model = text_model
        self.image_model = image_model
        self._client = client

    @property
    def client(self):
        # Built lazily so creating the app never touches the network
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
            logger.info("Gemini client initialized successfully")
        return self._client

    def _generate(self, model: str, contents: list, config: Optional[types.GenerateContentConfig] = None, context: str = "Gemini call"):
        logger.info(f"{context}: calling model '{model}'")
        try:
            response = self.client.models.generate_content(model=model, contents=contents, config=config)
        except Exception as e:
            logger.error(f"{context} failed: {type(e).__name__} - {e}", exc_info=True)
            raise UpstreamServiceError(details=str(e)) from e
        logger.info(f"{context}: response received")
        return response

    def describe_image(self, image_bytes: bytes, mime_type: str) -> str:
        """Returns the model's free-text description of the uploaded image."""
        response = self._generate(
            self.text_model,
            [types.Part.from_bytes(data=image_bytes, mime_type=mime_type), DESCRIPTION_PROMPT],
            config=types.GenerateContentConfig(temperature=0.2),
            context="describe_image",
        )
        text = (response.text or "").strip()
        if not text:
            logger.error("Empty description from Gemini")
            raise UpstreamServiceError("Gemini no devolvió ninguna descripción.")
        logger.info(f"Gemini description: {text[:200]}")
        return text

    def classify_image(self, image_bytes: bytes, mime_type: str) -> StructuredClassification:
        """
        Asks the model for {container, details} directly.
        The container is NOT validated here; see classifier.label_for_container.
        """
        response = self._generate(
            self.text_model,
            [types.Part.from_bytes(data=image_bytes, mime_type=mime_type), STRUCTURED_CLASSIFICATION_PROMPT],
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=StructuredClassification,
                temperature=0.1  # Low temperature for consistent classification
            ),
            context="classify_image",
        )
        payload = extract_json(response.text, context="structured classification")
        if not isinstance(payload, dict):
            raise UpstreamServiceError("La respuesta de Gemini no es un objeto JSON.", details=str(payload)[:500])
        try:
            result = StructuredClassification.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Structured classification failed validation: {e}")
            raise UpstreamServiceError("La respuesta de Gemini no tiene el formato esperado.", details=str(e)) from e
        logger.info(f"Structured classification result: {result.model_dump()}")
        return result

    def generate_image(self, subject: str) -> Optional[str]:
        """
        Generates a quiz image and returns it as a data URL.
        Returns None when the model answered without any image part.
        """
        response = self._generate(
            self.image_model,
            [QUIZ_IMAGE_PROMPT.format(subject=subject)],
            context=f"generate_image ({subject})",
        )
        for candidate in response.candidates or []:
            if not candidate.content:
                continue
            for part in candidate.content.parts or []:
                inline = part.inline_data
                if inline and inline.data:
                    data = inline.data
                    if isinstance(data, str):
                        encoded = data
                    else:
                        encoded = base64.b64encode(data).decode("ascii")
                    return f"data:{inline.mime_type or 'image/png'};base64,{encoded}"
        logger.warning(f"Gemini returned no image for '{subject}'")
        return None

    def generate_questions(self, count: int) -> List[GeneratedQuestion]:
        """Asks the text model for `count` quiz questions. Invalid entries are skipped."""
        prompt = QUIZ_QUESTIONS_PROMPT.replace('{count_placeholder}', str(count))
        response = self._generate(
            self.text_model,
            [prompt],
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=list[GeneratedQuestion],
                temperature=0.9
            ),
            context="generate_questions",
        )
        payload = extract_json(response.text, context="quiz questions")
        if isinstance(payload, dict):
            payload = [payload]
        if not isinstance(payload, list):
            raise UpstreamServiceError("La respuesta de Gemini no es una lista de preguntas.", details=str(payload)[:500])

        questions = []
        for item in payload:
            try:
                questions.append(GeneratedQuestion.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping malformed quiz question {item!r}: {e}")
        return questions[:count]

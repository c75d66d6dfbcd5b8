import logging
from typing import List, NamedTuple
from urllib.parse import quote_plus
from flask import Blueprint, request, jsonify, current_app

from classifier import CONTAINERS, CategoryLabel
from dependencies import get_gemini_service
from .error_utils import UpstreamServiceError, validation_error
from .pydantic_models import QuizItem
from .sanitization import sanitize_integer, sanitize_string

quiz_bp = Blueprint('quiz_bp', __name__)

MAX_QUIZ_ITEMS = 10

BLANCO = CONTAINERS[CategoryLabel.RECYCLABLE]
VERDE = CONTAINERS[CategoryLabel.ORGANIC]
NEGRO = CONTAINERS[CategoryLabel.NON_RECYCLABLE]


class WasteSample(NamedTuple):
    name: str
    container: str
    image_subject: str
    justification: str
    placeholder_text: str


QUIZ_CATALOG = (
    WasteSample("Botella de plástico", BLANCO, "una botella de plástico sucia y aplastada",
                "El plástico es aprovechable si se deposita limpio y seco.", "Botella"),
    WasteSample("Cáscara de banano", VERDE, "una cáscara de banano",
                "Los restos de fruta son residuos orgánicos compostables.", "Banano"),
    WasteSample("Lata de aluminio", BLANCO, "una lata de aluminio",
                "Los metales como el aluminio se pueden reciclar.", "Lata"),
    WasteSample("Servilleta usada", NEGRO, "una servilleta de papel usada y arrugada",
                "Las servilletas usadas están contaminadas y no se pueden aprovechar.", "Servilleta"),
    WasteSample("Caja de cartón", BLANCO, "una caja de cartón vacía y doblada",
                "El cartón limpio y seco es aprovechable.", "Carton"),
    WasteSample("Corazón de manzana", VERDE, "un corazón de manzana mordido",
                "Los restos de comida van al contenedor de orgánicos.", "Manzana"),
    WasteSample("Frasco de vidrio", BLANCO, "un frasco de vidrio vacío sin tapa",
                "El vidrio es aprovechable y se recicla indefinidamente.", "Frasco"),
    WasteSample("Rollo de papel higiénico usado", NEGRO, "papel higiénico usado",
                "El papel higiénico es un residuo sanitario no aprovechable.", "Papel+higienico"),
)


def placeholder_url(text: str) -> str:
    return f"https://placehold.co/400x400/png?text={quote_plus(text, safe='+')}"


def pick_samples(count: int) -> List[WasteSample]:
    """First `count` catalog entries, cycling when more are requested than exist."""
    return [QUIZ_CATALOG[i % len(QUIZ_CATALOG)] for i in range(count)]


def fallback_items(count: int) -> List[QuizItem]:
    return [
        QuizItem(
            imageUrl=placeholder_url(sample.placeholder_text),
            wasteName=f"{sample.name} (Fallback)",
            correctContainer=sample.container,
            justification=sample.justification,
        )
        for sample in pick_samples(count)
    ]


def items_from_images(count: int) -> List[QuizItem]:
    """One image request per sample, stopping at the first upstream failure."""
    service = get_gemini_service()
    items = []
    for sample in pick_samples(count):
        try:
            image_url = service.generate_image(sample.image_subject)
        except UpstreamServiceError as e:
            logging.warning(f"Quiz image generation failed ({e.details}); using fallback items")
            return fallback_items(count)
        items.append(QuizItem(
            imageUrl=image_url or placeholder_url(sample.placeholder_text),
            wasteName=sample.name,
            correctContainer=sample.container,
            justification=sample.justification,
        ))
    return items


def items_from_questions(count: int) -> List[QuizItem]:
    """AI-written questions; entries with a container outside the known bins are dropped."""
    try:
        questions = get_gemini_service().generate_questions(count)
    except UpstreamServiceError as e:
        logging.warning(f"Quiz question generation failed ({e.details}); using fallback items")
        return fallback_items(count)

    valid_containers = set(CONTAINERS.values())
    items = []
    for question in questions:
        if question.correctContainer not in valid_containers:
            logging.warning(f"Dropping quiz question '{question.wasteName}' with unknown container '{question.correctContainer}'")
            continue
        waste_name = sanitize_string(question.wasteName, max_length=100)
        items.append(QuizItem(
            imageUrl=placeholder_url(waste_name),
            wasteName=waste_name,
            correctContainer=question.correctContainer,
            justification=sanitize_string(question.justification, max_length=500) or None,
        ))

    if not items:
        logging.warning("Gemini produced no usable quiz questions; using fallback items")
        return fallback_items(count)
    return items


QUIZ_STRATEGY_HANDLERS = {
    "images": items_from_images,
    "questions": items_from_questions,
}


@quiz_bp.route('/create', methods=['GET'])
def create_quiz():
    """
    Returns a single quiz item, or a list of them when ?count=N is given.
    Without count the answer is one object, not a list; the quiz modal asks
    for ?count=3 to get its three-question round.
    Upstream failures never surface here: placeholder items are served instead.
    """
    raw_count = request.args.get('count')
    if raw_count is None:
        count = 1
    else:
        try:
            count = sanitize_integer(raw_count, min_val=1, max_val=MAX_QUIZ_ITEMS)
        except ValueError as e:
            return validation_error(f"'count' must be an integer between 1 and {MAX_QUIZ_ITEMS}", details=str(e))

    strategy = current_app.config["QUIZ_STRATEGY"]
    logging.info(f"Creating {count} quiz item(s) with '{strategy}' strategy")
    items = QUIZ_STRATEGY_HANDLERS[strategy](count)

    if raw_count is None:
        return jsonify(items[0].model_dump()), 200
    return jsonify([item.model_dump() for item in items]), 200

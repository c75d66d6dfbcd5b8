DESCRIPTION_PROMPT = """
Describe brevemente, en español y en una o dos frases, el residuo principal que aparece en esta imagen.
Menciona el objeto, su material (plástico, vidrio, metal, papel, cartón, restos de comida, etc.)
y si se ve sucio o contaminado. No incluyas recomendaciones ni formato markdown.
"""

STRUCTURED_CLASSIFICATION_PROMPT = """
Analiza esta imagen de un residuo.
1. Identifica qué objeto es.
2. Clasifícalo en uno de los siguientes contenedores de reciclaje de Colombia:
   - Blanco (Aprovechables): Plástico, vidrio, metales, papel, cartón.
   - Verde (Orgánicos): Restos de comida, desechos agrícolas.
   - Negro (No Aprovechables): Papel higiénico, servilletas, papeles contaminados, cartón contaminado.

Responde ÚNICAMENTE con un objeto JSON válido con este formato (sin markdown):
{
    "container": "Blanco (Aprovechables) | Verde (Orgánicos) | Negro (No Aprovechables)",
    "details": {
        "confidence": "Alta/Media/Baja",
        "objectName": "Nombre del objeto",
        "reason": "Breve explicación"
    }
}
"""

QUIZ_IMAGE_PROMPT = "Genera una imagen fotorrealista de {subject} en fondo blanco."

QUIZ_QUESTIONS_PROMPT = """
Eres un profesor de reciclaje en Colombia. Genera {count_placeholder} preguntas de práctica distintas.
Cada pregunta es un residuo común del hogar que el estudiante debe depositar en el contenedor correcto.

Los únicos contenedores válidos son, escritos exactamente así:
- "Blanco (Aprovechables)": plástico, vidrio, metales, papel y cartón limpios.
- "Verde (Orgánicos)": restos de comida, desechos agrícolas.
- "Negro (No Aprovechables)": papel higiénico, servilletas, papeles y cartones contaminados.

Responde ÚNICAMENTE con un arreglo JSON (sin markdown) de objetos con este formato:
[
    {
        "wasteName": "Nombre corto del residuo",
        "correctContainer": "uno de los contenedores válidos",
        "justification": "Una frase explicando por qué"
    }
]
"""

from pydantic import BaseModel, Field
from typing import Optional

# --- ANALYSIS ---
class ClassificationDetails(BaseModel):
    confidence: str = ""
    objectName: str = ""
    reason: str = ""

# Shape the structured strategy asks Gemini to return (also used as response_schema)
class StructuredClassification(BaseModel):
    container: str
    details: ClassificationDetails = Field(default_factory=ClassificationDetails)

class AnalyzeResponse(BaseModel):
    description: str
    classification: str
    category: str
    container: Optional[str] = None
    strategy: str
    details: Optional[ClassificationDetails] = None

# --- QUIZ ---
class GeneratedQuestion(BaseModel):
    wasteName: str
    correctContainer: str
    justification: Optional[str] = None

class QuizItem(BaseModel):
    imageUrl: str
    wasteName: str
    correctContainer: str
    justification: Optional[str] = None


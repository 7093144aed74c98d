from pydantic import BaseModel


class AskRequest(BaseModel):
    q: str = ""


class AskAnswer(BaseModel):
    answer: str

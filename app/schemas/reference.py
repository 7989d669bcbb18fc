from pydantic import BaseModel


class ReferenceCreate(BaseModel):
    name: str | None = None


class ReferenceResponse(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True

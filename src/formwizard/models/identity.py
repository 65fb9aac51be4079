"""
Identidad opaca de quien completa el formulario.

El motor no la valida ni la persiste: solo se la pasa a la fuente de esquemas.
"""

from pydantic import BaseModel, ConfigDict, Field


class Identity(BaseModel):
    """Usuario que completa el formulario."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    roll_number: str = Field(..., alias="rollNumber", min_length=1)
    name: str = ""

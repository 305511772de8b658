from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Modèle de base: champs snake_case en Python, camelCase sur le réseau"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

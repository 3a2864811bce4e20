"""
Common Pydantic schemas shared across endpoints.
"""
from pydantic import BaseModel, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exchanging camelCase field names on the wire."""
    
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class PatchModel(CamelModel):
    """
    Base for partial-update payloads.
    
    Every field is optional, but a field that is sent may not be null.
    """
    
    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        nulls = sorted(name for name in self.model_fields_set if getattr(self, name) is None)
        if nulls:
            raise ValueError(f"Fields may not be null: {', '.join(nulls)}")
        return self
    
    def changes(self) -> dict:
        """Only the fields the client actually sent, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    database: str

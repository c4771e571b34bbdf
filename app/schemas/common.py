"""
Common Pydantic schemas
"""

from typing import Any, Optional
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """Base model exchanging camelCase keys on the wire"""
    
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

class ErrorResponse(CamelModel):
    """Error response schema"""
    success: bool = False
    error: str
    error_code: Optional[str] = None
    details: Optional[Any] = None

class PasswordRequest(CamelModel):
    """Body carrying only the admin password"""
    password: Optional[str] = None

"""API request models."""

from pydantic import BaseModel, Field
from typing import Optional, Literal


class TreeValidationRequest(BaseModel):
    """Request to validate a document against a schema document."""

    schema_document: str = Field(
        ...,
        min_length=1,
        description="XSD-like schema, or an example-shaped XML document",
        examples=[
            '<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">'
            '<xs:element name="user"><xs:complexType><xs:sequence>'
            '<xs:element name="name" type="xs:string"/>'
            '<xs:element name="age" type="xs:positiveInteger"/>'
            '<xs:element name="email" type="xs:string"/>'
            "</xs:sequence></xs:complexType></xs:element></xs:schema>"
        ],
    )
    document: str = Field(..., min_length=1, description="The document to check")
    format: Literal["json", "xml"] = "xml"
    root_name: Optional[str] = Field(
        default=None,
        description="Top-level schema element to use; the first one when omitted",
    )
    policy: Optional[Literal["by_tag", "positional"]] = None
    allow_extra: Optional[bool] = None

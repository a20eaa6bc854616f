"""
Prompt definitions: a Jinja2 template bound to typed input and output models
"""
import re
from typing import Any, Dict, List, Optional, Type

from jinja2 import BaseLoader, Environment, StrictUndefined
from pydantic import BaseModel

_env = Environment(
    loader=BaseLoader(),
    autoescape=False,
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
)

_DATA_URI = re.compile(r"^data:(?P<mime>[^;,]+)?(?P<params>(?:;[^;,]*)*?);base64,(?P<data>.*)$", re.DOTALL)

# JSON Schema keywords the generative backend accepts in a response schema
_SCHEMA_KEYWORDS = {
    "type", "format", "description", "nullable", "enum",
    "maxItems", "minItems", "required", "propertyOrdering",
}


class MediaPart(BaseModel):
    """Media referenced by a prompt; inline when given as a base64 data URI"""
    url: str
    mime_type: Optional[str] = None
    data: Optional[str] = None

    @property
    def is_inline(self) -> bool:
        return self.data is not None

    @classmethod
    def from_url(cls, url: str) -> "MediaPart":
        match = _DATA_URI.match(url)
        if not match:
            return cls(url=url)
        return cls(
            url=url,
            mime_type=match.group("mime") or "application/octet-stream",
            data=match.group("data"),
        )


class RenderedPrompt(BaseModel):
    """A prompt ready to submit"""
    name: str
    text: str
    media: List[MediaPart] = []
    response_schema: Optional[Dict[str, Any]] = None


def response_schema(model: Type[BaseModel]) -> Dict[str, Any]:
    """
    Derive a generative backend response schema from a pydantic model

    References are inlined, Optional fields become nullable, and keywords
    the backend rejects (titles, defaults) are dropped.
    """
    schema = model.model_json_schema(by_alias=True)
    definitions = schema.pop("$defs", {})
    return _simplify_schema(schema, definitions)


def _simplify_schema(node: Dict[str, Any], definitions: Dict[str, Any]) -> Dict[str, Any]:
    if "$ref" in node:
        target = definitions[node["$ref"].rsplit("/", 1)[-1]]
        merged = dict(target)
        if "description" in node:
            merged["description"] = node["description"]
        return _simplify_schema(merged, definitions)

    if "anyOf" in node:
        variants = [v for v in node["anyOf"] if v.get("type") != "null"]
        nullable = len(variants) != len(node["anyOf"])
        simplified = _simplify_schema(variants[0], definitions) if len(variants) == 1 else {"type": "STRING"}
        if nullable:
            simplified["nullable"] = True
        if "description" in node:
            simplified["description"] = node["description"]
        return simplified

    result: Dict[str, Any] = {}
    for key, value in node.items():
        if key == "properties":
            result["properties"] = {
                name: _simplify_schema(prop, definitions) for name, prop in value.items()
            }
            result["propertyOrdering"] = list(value.keys())
        elif key == "items":
            result["items"] = _simplify_schema(value, definitions)
        elif key == "type":
            result["type"] = str(value).upper()
        elif key in _SCHEMA_KEYWORDS:
            result[key] = value
    return result


class PromptDefinition:
    """
    Named prompt template with its input and output contracts.

    ``text_output_field`` marks prompts whose output model holds a single
    free-text field: those are submitted without a response schema and the
    model text is wrapped into that field.
    """

    def __init__(
        self,
        name: str,
        template: str,
        input_model: Type[BaseModel],
        output_model: Type[BaseModel],
        text_output_field: Optional[str] = None,
        static_context: Optional[Dict[str, Any]] = None,
    ):
        self.name = name
        self.input_model = input_model
        self.output_model = output_model
        self.text_output_field = text_output_field
        self.static_context = static_context or {}
        self._template = _env.from_string(template)

    @property
    def is_structured(self) -> bool:
        return self.text_output_field is None

    def render(self, flow_input: BaseModel, structured: Optional[bool] = None) -> RenderedPrompt:
        """
        Render the template for a validated input

        Args:
            flow_input: Instance of ``input_model``
            structured: Request schema-constrained JSON; defaults to ``is_structured``

        Returns:
            RenderedPrompt with collected media parts
        """
        media: List[MediaPart] = []

        def add_media(url: str) -> str:
            media.append(MediaPart.from_url(url))
            return ""

        context = dict(self.static_context)
        context.update(flow_input.model_dump())
        context["media"] = add_media
        text = self._template.render(**context).strip()

        if structured is None:
            structured = self.is_structured

        return RenderedPrompt(
            name=self.name,
            text=text,
            media=media,
            response_schema=response_schema(self.output_model) if structured else None,
        )

"""
Flow base class: validate input, render the prompt, call the backend, validate output
"""
import json
from typing import Any, AsyncIterator, Dict, Generic, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from ..errors import FlowInputError, FlowOutputError, flatten_validation_errors
from ..genai.client import GenerativeClient
from ..genai.prompts import PromptDefinition
from ..utils.logger import setup_logger

logger = setup_logger(__name__)

InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT", bound=BaseModel)


class Flow(Generic[InputT, OutputT]):
    """
    A named, schema-typed operation backed by a generative prompt.

    Subclasses set ``name`` and ``prompt`` and may override ``postprocess``
    to normalize loosely structured model output before it is validated.
    """

    name: str = "flow"
    prompt: PromptDefinition

    def __init__(self, client: GenerativeClient):
        self.client = client

    @property
    def input_model(self) -> Type[InputT]:
        return self.prompt.input_model

    @property
    def output_model(self) -> Type[OutputT]:
        return self.prompt.output_model

    def validate_input(self, flow_input: Union[InputT, Dict[str, Any]]) -> InputT:
        """
        Validate a raw mapping or model instance against the input model

        Raises:
            FlowInputError: With flattened field-level details
        """
        if isinstance(flow_input, self.input_model):
            return flow_input
        try:
            return self.input_model.model_validate(flow_input)
        except ValidationError as e:
            raise FlowInputError(self.name, flatten_validation_errors(e.errors())) from e

    def parse_output(self, text: Optional[str]) -> Optional[Any]:
        """Turn model text into a value for ``postprocess``; None when the model returned nothing"""
        if text is None or not text.strip():
            return None

        if not self.prompt.is_structured:
            return {self.prompt.text_output_field: text}

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            logger.error(f"{self.name}: model output is not valid JSON: {text[:200]!r}")
            raise FlowOutputError(self.name, "model output is not valid JSON") from e

    def postprocess(self, data: Optional[Any]) -> Any:
        if data is None:
            raise FlowOutputError(self.name, "model returned no output")
        return data

    async def run(self, flow_input: Union[InputT, Dict[str, Any]]) -> OutputT:
        """
        Run the flow to completion

        Args:
            flow_input: Input model instance or raw mapping (camelCase or snake_case keys)

        Returns:
            Validated output model instance

        Raises:
            FlowInputError: Input failed validation
            FlowOutputError: Output was missing or did not match the output schema
            GenerationError: The backend call failed
        """
        validated = self.validate_input(flow_input)
        rendered = self.prompt.render(validated)

        logger.info(f"Running flow {self.name}")
        text = await self.client.generate(rendered)

        data = self.postprocess(self.parse_output(text))
        try:
            return self.output_model.model_validate(data)
        except ValidationError as e:
            logger.error(f"{self.name}: model output failed schema validation: {e}")
            raise FlowOutputError(self.name, "model output did not match the output schema") from e

    async def stream(self, flow_input: Union[InputT, Dict[str, Any]]) -> AsyncIterator[str]:
        """
        Run the flow in streaming mode, yielding raw text increments

        Input is validated before the backend is called; output is not
        validated since it arrives piecemeal.
        """
        validated = self.validate_input(flow_input)
        rendered = self.prompt.render(validated, structured=False)

        logger.info(f"Streaming flow {self.name}")
        async for chunk in self.client.generate_stream(rendered):
            yield chunk

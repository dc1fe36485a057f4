"""
Articulate Module: Result Aggregator & Serializer

Folds the per-phase outcomes of an ActionResult into one error flag and
renders the result as canonical JSON: sorted keys, absent fields omitted,
unescaped "/" and non-ASCII, NaN/Infinity rejected. Equal results always
render to identical text.
"""

import json

from pydantic import ValidationError

from ..exceptions import SerializationError
from ..models.actions import ActionOptions
from ..models.contracts import ActionResult, ToolCallResponse
from ..utils.logging import ComponentLogger, articulate_logger


def has_error(result: ActionResult, options: ActionOptions) -> bool:
    """
    Overall error flag for a call.

    Traversal errors only count when that traversal was requested.
    """
    return (
        result.primary_action_error is not None
        or (options.traverse_before and result.traversal_before_error is not None)
        or (options.traverse_after and result.traversal_after_error is not None)
    )


def serialize_result(result: ActionResult) -> str:
    """
    Render an ActionResult to canonical JSON text.

    Raises:
        SerializationError: If the result holds values JSON cannot represent
    """
    try:
        payload = result.model_dump(mode="json", by_alias=True, exclude_none=True)
        return json.dumps(
            payload,
            indent=2,
            sort_keys=True,
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise SerializationError(f"failed to encode ActionResult to JSON: {e}") from e


def parse_result(text: str) -> ActionResult:
    """
    Parse text produced by serialize_result back into an ActionResult.

    Raises:
        SerializationError: If the text is not a serialized ActionResult
    """
    try:
        return ActionResult.model_validate_json(text)
    except ValidationError as e:
        raise SerializationError(f"failed to decode ActionResult from JSON: {e}") from e


class ResultArticulator:
    """
    Turns an engine result into the tool-call response.

    Example:
        articulator = ResultArticulator()
        response = articulator.articulate("macos-use_refresh_traversal", result, options)
        response.is_error  # False unless a requested phase failed
    """

    def __init__(self, ops_logger: ComponentLogger = articulate_logger):
        self.ops_logger = ops_logger

    def articulate(
        self, tool: str, result: ActionResult, options: ActionOptions
    ) -> ToolCallResponse:
        """
        Serialize the result and compute its error flag.

        Raises:
            SerializationError: Propagated from serialize_result
        """
        try:
            text = serialize_result(result)
        except SerializationError as e:
            self.ops_logger.log_operation_error("serialize_result", e, {"tool": tool})
            raise

        is_error = has_error(result, options)
        if is_error:
            self.ops_logger.logger.warning(
                "action_resulted_in_error_state",
                tool=tool,
                primary=result.primary_action_error,
                before=result.traversal_before_error,
                after=result.traversal_after_error,
            )
        else:
            self.ops_logger.logger.debug("serialized_action_result", tool=tool, size=len(text))

        return ToolCallResponse(
            text=text,
            is_error=is_error,
            metadata={"tool": tool, "traversal_pid": result.traversal_pid},
        )

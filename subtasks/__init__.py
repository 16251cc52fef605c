from .completion import CompletionClient, CompletionError, build_prompt
from .fanout import FanOutResult, fan_out, generate_subtasks, split_subtasks, subtask_text

__all__ = [
    "CompletionClient",
    "CompletionError",
    "build_prompt",
    "FanOutResult",
    "fan_out",
    "generate_subtasks",
    "split_subtasks",
    "subtask_text",
]

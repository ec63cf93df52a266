"""azmcp package initialization."""

from azmcp.codec import (
    BoundInvocation,
    Token,
    argument_tokens,
    bind,
    encode_arguments,
    tokenize,
)
from azmcp.errors import MCPError, ServiceError
from azmcp.executor import CommandArgs, CommandContext, CommandRunner
from azmcp.options import OptionContributor, OptionDefinition, RetryPolicy, ValueKind
from azmcp.registry import CommandLeaf, CommandRegistry, ToolAnnotations
from azmcp.response import CommandOutput, ResponseEnvelope
from azmcp.server import MCPServer

__all__ = [
    "BoundInvocation",
    "CommandArgs",
    "CommandContext",
    "CommandLeaf",
    "CommandOutput",
    "CommandRegistry",
    "CommandRunner",
    "MCPError",
    "MCPServer",
    "OptionContributor",
    "OptionDefinition",
    "ResponseEnvelope",
    "RetryPolicy",
    "ServiceError",
    "Token",
    "ToolAnnotations",
    "ValueKind",
    "argument_tokens",
    "bind",
    "encode_arguments",
    "tokenize",
]

"""Declarative descriptors of the remote speech translation API.

The descriptors are data: validation and URI construction read them
generically, so adding a parameter to the API means adding a row here.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

QUERY_STRING_PARAM = "queryStringParam"
HEADER_PARAM = "header"


class ParameterDescriptor(BaseModel):
    """One query-string parameter or header accepted by an operation."""

    model_config = {"frozen": True}

    name: str
    value: str | None = None
    description: str = ""
    required: bool = False
    options: tuple[str, ...] = ()
    type: Literal["queryStringParam", "header"] = QUERY_STRING_PARAM
    type_name: str = "string"
    # Values are comma separated lists; each element is checked against options.
    multi_value: bool = False


class OperationDescriptor(BaseModel):
    """Static metadata for one remote API call."""

    model_config = {"frozen": True}

    path: str
    method: str = "GET"
    headers: tuple[ParameterDescriptor, ...] = Field(default_factory=tuple)
    parameters: tuple[ParameterDescriptor, ...] = Field(default_factory=tuple)

    def parameter(self, name: str) -> ParameterDescriptor | None:
        for p in self.parameters:
            if p.name == name:
                return p
        return None

    def header(self, name: str) -> ParameterDescriptor | None:
        lowered = name.lower()
        for h in self.headers:
            if h.name.lower() == lowered:
                return h
        return None

    @property
    def parameter_names(self) -> list[str]:
        return [p.name for p in self.parameters]

    @property
    def header_names(self) -> list[str]:
        return [h.name for h in self.headers]

    def defaults(self) -> dict[str, str]:
        """Query parameters that carry a non-empty default value."""
        return {p.name: p.value for p in self.parameters if p.value}

    def header_defaults(self) -> dict[str, str]:
        return {h.name: h.value for h in self.headers if h.value}


def _header(name: str, value: str | None, description: str) -> ParameterDescriptor:
    return ParameterDescriptor(name=name, value=value, description=description, type=HEADER_PARAM)


SPEECH_TRANSLATE = OperationDescriptor(
    path="speech/translate",
    method="GET",
    headers=(
        _header("X-ClientTraceId", None, "Client generated GUID to trace the request"),
        _header(
            "X-CorrelationId",
            "1",
            "A client-generated identifier used to correlate multiple channels in a conversation",
        ),
        _header("X-ClientVersion", "1.0", "The client version"),
        _header("X-OsPlatform", None, "The client OS platform"),
    ),
    parameters=(
        ParameterDescriptor(
            name="api-version",
            value="1.0",
            description="The api version that should be used",
            required=True,
        ),
        ParameterDescriptor(name="from", description="Specifies the source language", required=True),
        ParameterDescriptor(name="to", description="Specifies the result language", required=True),
        ParameterDescriptor(
            name="features",
            description="Comma separated set of features",
            options=("TextToSpeech", "Partial", "TimingInfo"),
            multi_value=True,
        ),
        ParameterDescriptor(name="voice", description="The voice that should be used for the translation"),
        ParameterDescriptor(
            name="format",
            description="The file format specified for the services response",
            options=("audio/wav", "audio/mp3"),
        ),
        ParameterDescriptor(
            name="ProfanityAction",
            description="Specifies how the service will handle profanities",
            options=("NoAction", "Marked", "Deleted"),
        ),
        ParameterDescriptor(
            name="ProfanityMarker",
            description="Specifies how the service will mark profanities if ProfanityAction is set to Marked",
            options=("Asterisk", "Tag"),
        ),
    ),
)

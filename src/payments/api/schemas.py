"""Pydantic request/response schemas for the Payments API."""

from pydantic import BaseModel


class ConfigureGatewayRequest(BaseModel):
    should_succeed: bool = True
    failure_reason: str = "Card declined"
    should_raise: bool = False


class GatewayConfigResponse(BaseModel):
    gateway: str
    should_succeed: bool
    should_raise: bool
    failure_reason: str

"""Command Route — forwards named commands to CommandDispatch.

Invariants:
    - Always 200: success or failure is carried in the body's "status" field,
      the same envelope an in-process caller of CommandDispatch receives
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from sales_report.services.command_dispatch import CommandDispatch
from sales_report.services.record_services import RecordServices, get_services

router = APIRouter(prefix="/api/v1/commands", tags=["commands"])


@router.get("")
async def list_commands(services: RecordServices = Depends(get_services)):
    return {"commands": CommandDispatch(services).commands}


@router.post("/{command}")
async def run_command(
    command: str,
    payload: dict[str, Any] | None = Body(default=None),
    services: RecordServices = Depends(get_services),
):
    return await CommandDispatch(services).execute(command, payload)

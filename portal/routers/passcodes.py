# portal/routers/passcodes.py
"""Passcode CRUD (admin) and passcode login for the event wall."""

from fastapi import APIRouter, BackgroundTasks, Depends

from portal.schemas.passcode import PasscodeIn, PasscodeLogin, PasscodeOut, PasscodeSession
from portal.services import passcode_service
from portal.services.notification_service import Notifier, get_notifier
from portal.services.session_service import ClientInfo, client_info, require_admin
from portal.store import SupabaseStore, get_store

router = APIRouter()


@router.get("/passcodes", response_model=list[PasscodeOut], summary="List passcodes by level",
            dependencies=[Depends(require_admin)])
async def list_passcodes(store: SupabaseStore = Depends(get_store)):
    return await passcode_service.list_passcodes(store)


@router.post("/passcodes", summary="Create or update a passcode",
             dependencies=[Depends(require_admin)])
async def save_passcode(body: PasscodeIn, store: SupabaseStore = Depends(get_store)):
    await passcode_service.upsert_passcode(store, body.passcode, body.level)
    return {"ok": True}


@router.delete("/passcodes/{passcode}", summary="Remove a passcode",
               dependencies=[Depends(require_admin)])
async def remove_passcode(passcode: str, store: SupabaseStore = Depends(get_store)):
    await passcode_service.delete_passcode(store, passcode)
    return {"ok": True}


@router.post("/passcode/login", response_model=PasscodeSession, summary="Enter the wall")
async def passcode_login(body: PasscodeLogin, tasks: BackgroundTasks,
                         client: ClientInfo = Depends(client_info),
                         store: SupabaseStore = Depends(get_store),
                         notifier: Notifier = Depends(get_notifier)):
    return await passcode_service.passcode_login(store, notifier, tasks, client, body.passcode)

# portal/routers/admin.py
"""Admin authentication: login and the OTP password reset flow."""

from fastapi import APIRouter, BackgroundTasks, Depends

from portal.schemas.admin import AdminLogin, AdminSession, ResetRequest, VerifyOtp
from portal.services import admin_service
from portal.services.notification_service import Notifier, get_notifier
from portal.services.session_service import ClientInfo, client_info
from portal.store import SupabaseStore, get_store

router = APIRouter()


@router.post("/admin/login", response_model=AdminSession, summary="Admin login")
async def admin_login(body: AdminLogin, tasks: BackgroundTasks,
                      client: ClientInfo = Depends(client_info),
                      store: SupabaseStore = Depends(get_store),
                      notifier: Notifier = Depends(get_notifier)):
    return await admin_service.login(store, notifier, tasks, client,
                                     body.username, body.password or "")


@router.post("/admin/reset", summary="Email a one-time code and clear the admin password")
async def admin_reset(body: ResetRequest,
                      store: SupabaseStore = Depends(get_store),
                      notifier: Notifier = Depends(get_notifier)):
    await admin_service.reset(store, notifier, body.email)
    return {"ok": True}


@router.post("/admin/verify-otp", summary="Set a new admin password with a one-time code")
async def admin_verify_otp(body: VerifyOtp, store: SupabaseStore = Depends(get_store)):
    await admin_service.verify_otp(store, body.otp, body.newPassword)
    return {"ok": True}

"""Interactive sign-in flow (core domain).

The flow reuses an authorized session when there is one; otherwise it walks
phone -> code -> optional 2FA password and persists the new session.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from core.errors import AuthenticationError, SessionSaveError
from core.ports import AuthPort, ConsolePort, PasswordRequired

LOGGER = logging.getLogger(__name__)

MAX_PASSWORD_ATTEMPTS = 3


async def _check_password(
    auth: AuthPort,
    console: ConsolePort,
    token: Any,
    hint: str,
    max_attempts: int,
) -> None:
    last_error: Optional[Exception] = None
    for attempt in range(max_attempts):
        tries_left = max_attempts - attempt
        password = console.prompt_secret(
            f"[{tries_left} / {max_attempts}] Enter the password (hint {hint}): "
        )
        try:
            await auth.check_password(token, password.strip())
        except Exception as exc:
            LOGGER.warning("Failed to check password: %s", exc)
            last_error = exc
            continue
        return

    raise AuthenticationError("Failed to sign in") from last_error


async def authenticate(
    auth: AuthPort,
    console: ConsolePort,
    max_password_attempts: int = MAX_PASSWORD_ATTEMPTS,
) -> bool:
    """Make sure the transport holds an authorized session.

    Returns True when a fresh login happened and the session was saved,
    False when the existing session was already authorized.
    """

    try:
        authorized = await auth.is_authorized()
    except Exception as exc:
        raise AuthenticationError("Failed to check if authorized") from exc
    if authorized:
        LOGGER.info("Already authorized")
        return False

    phone = console.prompt_line("Enter your phone number: ").strip()
    try:
        token = await auth.request_login_code(phone)
    except Exception as exc:
        raise AuthenticationError("Failed to request login code") from exc

    code = console.prompt_secret("Enter the code you received: ").strip()
    try:
        await auth.sign_in(token, code)
    except PasswordRequired as required:
        await _check_password(
            auth,
            console,
            token,
            required.hint or "None",
            max_password_attempts,
        )
    except Exception as exc:
        raise AuthenticationError("Failed to sign in") from exc

    LOGGER.info("Signed in")

    try:
        await auth.save_session()
    except Exception as exc:
        # A live session that the next run cannot load is worse than none.
        await auth.sign_out_disconnect()
        raise SessionSaveError("Failed to save session") from exc

    LOGGER.info("Session saved")
    return True

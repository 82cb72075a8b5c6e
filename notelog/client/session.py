"""
Stato di sessione del client: token e utente corrente.

È volatile per costruzione (vive solo in memoria, come la sessionStorage
del browser) e viene svuotato al logout o quando il token non è più valido.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, Optional


class SessionStore:
    def __init__(self):
        self._lock = threading.Lock()
        self._token: Optional[str] = None
        self._user: Optional[Dict[str, Any]] = None

    def save(self, token: str, user: Dict[str, Any]) -> None:
        with self._lock:
            self._token = token
            self._user = dict(user)

    def get_token(self) -> Optional[str]:
        with self._lock:
            return self._token

    def get_user(self) -> Optional[Dict[str, Any]]:
        with self._lock:
            return dict(self._user) if self._user is not None else None

    @property
    def is_authenticated(self) -> bool:
        return self.get_token() is not None

    def clear(self) -> None:
        with self._lock:
            self._token = None
            self._user = None

"""Role definitions for the contact list model."""

from __future__ import annotations

from enum import IntEnum
from typing import Dict

from PySide6.QtCore import Qt


class ContactRoles(IntEnum):
    """Custom roles exposed to QML or widgets."""

    CONTACT_ID = Qt.UserRole + 1
    NAME = Qt.UserRole + 2
    PHONE = Qt.UserRole + 3
    EMAIL = Qt.UserRole + 4
    CREATED_AT = Qt.UserRole + 5
    IS_AUTO_CREATED = Qt.UserRole + 6
    CALL_LINK_TYPE = Qt.UserRole + 7
    RECORD = Qt.UserRole + 8
    IS_TRIGGER = Qt.UserRole + 9


FIELD_FOR_ROLE: Dict[int, str] = {
    ContactRoles.NAME: "name",
    ContactRoles.PHONE: "phone_number",
    ContactRoles.EMAIL: "email",
    ContactRoles.CREATED_AT: "created_at",
    ContactRoles.IS_AUTO_CREATED: "is_auto_created",
    ContactRoles.CALL_LINK_TYPE: "call_link_type",
}


def role_names(base: Dict[int, bytes] | None = None) -> Dict[int, bytes]:
    """Return a mapping of Qt role numbers to byte names."""

    mapping: Dict[int, bytes] = {} if base is None else dict(base)
    mapping.update(
        {
            ContactRoles.CONTACT_ID: b"contactId",
            ContactRoles.NAME: b"name",
            ContactRoles.PHONE: b"phoneNumber",
            ContactRoles.EMAIL: b"email",
            ContactRoles.CREATED_AT: b"createdAt",
            ContactRoles.IS_AUTO_CREATED: b"isAutoCreated",
            ContactRoles.CALL_LINK_TYPE: b"callLinkType",
            ContactRoles.RECORD: b"record",
            ContactRoles.IS_TRIGGER: b"isTrigger",
        }
    )
    return mapping

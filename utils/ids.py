from __future__ import annotations

import hashlib
import uuid

from uml_types import XmiId


def xid() -> XmiId:
    return XmiId("id_" + uuid.uuid4().hex)


def stable_id(s: str) -> XmiId:
    return XmiId("id_" + hashlib.sha1(s.encode("utf-8")).hexdigest()[:16])


__all__ = ["xid", "stable_id"]

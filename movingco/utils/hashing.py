import hashlib
import json
from typing import Any


def normalize_payload(payload: Any) -> dict:
    if payload is None:
        return {}
    if hasattr(payload, "model_dump"):
        return payload.model_dump(exclude_unset=True)
    if isinstance(payload, dict):
        return payload
    return {"value": payload}


def payload_hash(payload: Any) -> str:
    s = json.dumps(normalize_payload(payload), sort_keys=True, default=str)
    return hashlib.sha256(s.encode()).hexdigest()

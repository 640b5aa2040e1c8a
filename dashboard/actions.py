import logging

import requests
import streamlit as st

logger = logging.getLogger(__name__)


def mutate(ctx, method, path, json=None, invalidates=(), success=None):
    """Send a write through the session cache; on failure show it and keep state."""
    try:
        result = ctx.cache.mutate(method, path, json=json, invalidates=tuple(invalidates))
    except (RuntimeError, requests.RequestException) as exc:
        logger.warning("%s %s failed: %s", method, path, exc)
        st.error(f"Could not save changes. {exc}")
        return None
    if success:
        st.toast(success)
    return result if result is not None else {}

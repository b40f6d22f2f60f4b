"""Streamlit helpers shared by the chat surface."""

from __future__ import annotations

import json

import requests
import streamlit as st


def show_api_error(error: Exception | requests.Response, *, st_module=st) -> None:
    """Render a consistent API error block in Streamlit."""

    response: requests.Response | None = None
    if isinstance(error, requests.HTTPError):
        response = error.response
    elif isinstance(error, requests.Response):
        response = error

    if response is None:
        st_module.error(f"Request failed: {error}")
        return

    message = _response_message(response)
    status = response.status_code
    st_module.error(f"Chat backend request failed ({status}): {message}")
    if response.url:
        st_module.caption(response.url)


def _response_message(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = response.text
    if isinstance(payload, dict):
        detail = payload.get("detail") or payload.get("message") or payload.get("error")
        if detail:
            return str(detail)
        return json.dumps(payload)
    return str(payload)


def trigger_rerun(st_module=st) -> None:
    rerun = getattr(st_module, "rerun", None) or getattr(st_module, "experimental_rerun", None)
    if rerun:
        rerun()


__all__ = ["show_api_error", "trigger_rerun"]

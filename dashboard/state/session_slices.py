from datetime import date

import streamlit as st


PREFIX = "slice"


def get_slice(slice_name):
    key = f"{PREFIX}.{slice_name}"
    if key not in st.session_state:
        st.session_state[key] = {}
    return st.session_state[key]


def get_value(slice_name, name, default=None):
    return get_slice(slice_name).get(name, default)


def get_date(slice_name, name, default: date):
    """Date stored in a slice, or ``default`` when unset or of the wrong type."""
    value = get_value(slice_name, name)
    return value if isinstance(value, date) else default


def set_value(slice_name, name, value):
    get_slice(slice_name)[name] = value


def update_slice(slice_name, values):
    get_slice(slice_name).update(values)

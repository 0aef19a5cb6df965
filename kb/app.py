"""
Privacy Knowledge Base — Streamlit Explorer.

Lets a human try the service's lookups:
- Action picker with the matching parameter fields
- Accept-Language string to exercise the language fallback
- JSON-LD answers, or the HTML error fragment as the client would get it
"""

import streamlit as st
import sys
from pathlib import Path

# --- Path Configuration ---
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.append(str(PROJECT_ROOT))

try:
    from kb.config import settings
    from kb.dispatcher import handle
    from kb.resolvers import Action
except ImportError:
    st.error("Import Error: Please run the app from the project root using 'streamlit run kb/app.py'")
    st.stop()

# --- Page Configuration ---
st.set_page_config(
    page_title="Privacy Knowledge Base",
    page_icon="🔐",
    layout="centered",
    initial_sidebar_state="collapsed"
)

st.title("🔐 Privacy Knowledge Base")
st.caption("Definitions, GDPR articles, DPAs and the DPV vocabulary")

# Parameters offered for each action.
ACTION_FIELDS = {
    Action.SEARCH: ["words"],
    Action.DEFINITIONS: ["term"],
    Action.ARTICLES: ["words"],
    Action.LEGAL_ARTICLE: ["article"],
    Action.DIRECTORY_ENTRY: ["country", "name"],
    Action.VOCABULARY_TERM: ["term"],
    Action.STATUS: [],
}

if not settings.DATABASE_PATH.exists():
    st.warning("Database not found. Run: `python -m kb.ingestion.loader`")
    st.stop()

# --- Query Form ---
action = st.selectbox("Action", list(Action), format_func=lambda a: a.value)
accept_language = st.text_input("Accept-Language", value="en")

params = {"action": action.value}
for field in ACTION_FIELDS[action]:
    value = st.text_input(field)
    if value:
        params[field] = value

if st.button("Look up"):
    status, payload = handle(params, accept_language or None)

    if status == 200:
        st.success(f"{status} OK")
        st.json(payload)
    else:
        st.error(f"Error {status}")
        st.html(payload)

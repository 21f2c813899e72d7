# FILE: frontend/app.py

import streamlit as st
import requests
import base64
import os
from dotenv import load_dotenv
from typing import Dict, Any, Optional

# --- Configuration ---
load_dotenv()
DEFAULT_API_BASE_URL = "http://localhost:8000/api"
API_BASE_URL = os.getenv("API_BASE_URL", DEFAULT_API_BASE_URL).rstrip('/')
REQUEST_TIMEOUT_SECONDS = 90

MAX_UPLOAD_BYTES = 10 * 1024 * 1024
SUPPORTED_TYPES = {"image/jpeg", "image/png", "image/webp"}

ANALYSIS_FIELDS = [
    ("type", "Type"),
    ("style", "Style"),
    ("lighting", "Lighting"),
    ("composition", "Composition"),
    ("colors", "Colors"),
    ("mood", "Mood"),
    ("realism", "Realism"),
]

# --- Session State Initialization ---
def init_session_state():
    defaults = {
        "last_upload_id": None,
        "result": None,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value

# --- API Helper Functions ---

def handle_api_error(response, context="API"):
    try:
        error_data = response.json()
        detail = error_data.get('error') or error_data.get('detail') or 'Unknown error'
        st.error(f"{context} Error (Status {response.status_code}): {detail}")
    except requests.exceptions.JSONDecodeError:
        st.error(f"{context} Error (Status {response.status_code}): {response.text}")

def to_data_uri(uploaded_file) -> str:
    encoded = base64.b64encode(uploaded_file.getvalue()).decode("utf-8")
    return f"data:{uploaded_file.type};base64,{encoded}"

def check_upload(uploaded_file) -> Optional[str]:
    if uploaded_file.type not in SUPPORTED_TYPES:
        return "Please upload a valid image file (JPG, PNG, or WebP)"
    if uploaded_file.size > MAX_UPLOAD_BYTES:
        return "File size exceeds 10MB limit"
    return None

def analyze_image(data_uri: str) -> Optional[Dict[str, Any]]:
    try:
        response = requests.post(
            f"{API_BASE_URL}/analyze",
            json={"image": data_uri},
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
        if response.status_code == 200:
            return response.json()
        handle_api_error(response, "Analysis")
        return None
    except requests.exceptions.RequestException as e:
        st.error(f"Network error during analysis: {e}")
        return None

# --- UI Rendering ---

def render_result(result: Dict[str, Any]):
    analysis = result.get("analysis")
    if analysis:
        st.subheader("Image Analysis")
        columns = st.columns(2)
        for i, (key, label) in enumerate(ANALYSIS_FIELDS):
            with columns[i % 2]:
                st.markdown(f"**{label}**")
                st.caption(analysis.get(key, "-"))

    st.subheader("Your Prompt")
    st.caption("Use the copy button in the corner of the box.")
    st.code(result.get("prompt", ""), language=None, wrap_lines=True)

    tips = result.get("tips")
    if tips:
        with st.expander("Tips for best results", expanded=False):
            for tip in tips:
                st.markdown(f"- {tip}")

def main():
    st.set_page_config(page_title="Style Prompt Generator", page_icon="✨", layout="centered")
    init_session_state()

    st.title("Style Prompt Generator")
    st.caption("Upload a picture whose look you like and get a prompt that recreates it with your face.")

    uploaded_file = st.file_uploader("Upload Image", type=["jpg", "jpeg", "png", "webp"])
    if uploaded_file is None:
        st.info("Drop an image (JPG, PNG or WebP, up to 10MB) to begin.")
        return

    upload_id = f"{uploaded_file.name}_{uploaded_file.size}"
    if st.session_state.last_upload_id != upload_id:
        st.session_state.result = None
        st.session_state.last_upload_id = upload_id

    upload_error = check_upload(uploaded_file)
    if upload_error:
        st.error(upload_error)
        return

    st.image(uploaded_file, width="stretch")

    col1, col2 = st.columns(2)
    with col1:
        analyze_clicked = st.button("Analyze Image", type="primary", width="stretch")
    with col2:
        if st.button("Reset", width="stretch"):
            st.session_state.result = None
            st.rerun()

    if analyze_clicked:
        with st.spinner("Analyzing image..."):
            result = analyze_image(to_data_uri(uploaded_file))
        if result and result.get("success"):
            st.session_state.result = result
            st.success("Your optimized prompt is ready!")
        elif result:
            st.error(result.get("error", "Oops! Something went wrong. Please try again."))

    if st.session_state.result:
        render_result(st.session_state.result)


main()

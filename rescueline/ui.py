# Run from project root: streamlit run rescueline/ui.py
# Coordinator dashboard. Talks to the backend API: GET /api/reports, GET/POST /api/documents, POST /api/information.

import sys
from pathlib import Path

# Ensure project root is on path (Streamlit may run with cwd != project root)
_root = str(Path(__file__).resolve().parent.parent)
if _root not in sys.path:
    sys.path.insert(0, _root)

import pandas as pd
import requests
import streamlit as st

from rescueline.core.config import API_BASE
from rescueline.ingest.loader import SUPPORTED_EXTENSIONS

st.set_page_config(page_title="Disaster Rescue Dashboard", layout="wide")
st.title("Disaster Rescue Dashboard")

reports_tab, documents_tab, ask_tab = st.tabs(["Reports", "Reference documents", "Ask the information line"])

# --- Reports ---

with reports_tab:
    if st.button("Refresh reports", key="refresh_reports"):
        st.rerun()
    try:
        r = requests.get(f"{API_BASE}/api/reports", timeout=10)
        if r.ok:
            reports = r.json()
            if reports:
                df = pd.DataFrame(reports)
                urgent = int(df["isUrgentMedical"].sum())
                st.metric("Reports", len(df), help="Newest first")
                st.metric("Urgent medical", urgent)
                columns = ["timestamp", "location", "peopleCount", "needDescription", "isUrgentMedical", "status", "callerNumber"]
                st.dataframe(
                    df[columns].style.apply(
                        lambda row: ["background-color: #ffd6d6" if row["isUrgentMedical"] else "" for _ in row],
                        axis=1,
                    ),
                    use_container_width=True,
                )
            else:
                st.caption("No reports received yet.")
        else:
            st.error(f"Could not load reports: {r.status_code}")
    except requests.RequestException:
        st.caption("Backend not reachable — start the API first.")

# --- Documents ---

with documents_tab:
    uploaded = st.file_uploader(
        "Upload a reference document (shelter lists, water advisories, evacuation routes)",
        type=sorted(ext.lstrip(".") for ext in SUPPORTED_EXTENSIONS),
    )
    if uploaded is not None and st.button("Upload", key="upload_doc"):
        try:
            files = {"documentFile": (uploaded.name, uploaded.getvalue(), uploaded.type or "application/octet-stream")}
            r = requests.post(f"{API_BASE}/api/documents", files=files, timeout=60)
            if r.ok:
                st.success(r.json().get("message", "Uploaded."))
            else:
                st.error(f"Upload failed: {r.status_code} — {r.text[:200]}")
        except requests.RequestException as e:
            st.error(f"Request failed: {e}")

    try:
        r = requests.get(f"{API_BASE}/api/documents", timeout=10)
        if r.ok:
            docs = r.json()
            if docs:
                st.caption("Documents available as answer context:")
                for d in docs:
                    st.caption(f"  • {d['originalName']} ({d['mimeType']}) — {d['uploadedAt']}")
            else:
                st.caption("No documents uploaded yet.")
    except requests.RequestException:
        st.caption("Backend not reachable — start the API first.")

# --- Ask ---

with ask_tab:
    question = st.text_input("Question", placeholder="Is the tap water safe to drink?")
    if st.button("Ask", key="ask", disabled=not question.strip()):
        with st.spinner("Asking..."):
            try:
                r = requests.post(f"{API_BASE}/api/information", json={"query": question}, timeout=60)
                if r.ok or r.status_code == 500:
                    st.write(r.json().get("answer", ""))
                else:
                    st.error(f"Request failed: {r.status_code} — {r.text[:200]}")
            except requests.RequestException as e:
                st.error(f"Request failed: {e}")

# frontend/app.py
import os
import requests
import pandas as pd
import streamlit as st

# ------------------ Config ------------------
API_URL = os.getenv("API_URL", "http://localhost:8000")  # internal base for API requests
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))
PAGE_SIZE = 20

st.set_page_config(page_title="VCNTY Seller Dashboard", layout="wide")
st.title("VCNTY · Bulk Item Import")

# ------------------ Helpers ------------------
def api_online() -> bool:
    try:
        return requests.get(f"{API_URL}/health", timeout=5).ok
    except Exception:
        return False

def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"} if token else {}

def _ensure_state_keys():
    for k in ["last_import", "items_page"]:
        if k not in st.session_state:
            st.session_state[k] = None
    if st.session_state["items_page"] is None:
        st.session_state["items_page"] = 0

@st.cache_data(show_spinner=False)
def fetch_store_items(store_id: str, token: str, page: int) -> list[dict]:
    r = requests.get(
        f"{API_URL}/api/stores/{store_id}/items",
        params={"limit": PAGE_SIZE, "offset": page * PAGE_SIZE},
        headers=auth_headers(token),
        timeout=30,
    )
    r.raise_for_status()
    body = r.json()
    if isinstance(body, dict):
        return body.get("items") or body.get("data") or []
    return body

def report_card(report: dict):
    c1, c2, c3 = st.columns(3)
    c1.metric("Total", report.get("total", 0))
    c2.metric("Success", report.get("success", 0))
    c3.metric("Failed", report.get("failed", 0))

# ------------------ App ------------------
_online = api_online()
st.info(f"API: {'ONLINE ✅' if _online else 'OFFLINE ❌'} → {API_URL}")
_ensure_state_keys()

with st.sidebar:
    store_id = st.text_input("Store ID", key="store_id")
    token = st.text_input("Access token", type="password", key="token")
    st.caption("Items are located at the store's coordinates automatically.")

tabs = st.tabs(["📦 Import", "🗂️ Inventory"])

# ------------------ Import ------------------
with tabs[0]:
    st.write("**Template required:** use the standard column layout.")
    c_tpl = st.columns([1, 1, 5])
    for col, fmt in zip(c_tpl[:2], ["csv", "xlsx"]):
        if col.button(f"Get template ({fmt.upper()})", key=f"btn_tpl_{fmt}"):
            try:
                t = requests.get(f"{API_URL}/api/items/template", params={"fmt": fmt}, timeout=10)
                st.download_button(
                    f"Click to download {fmt.upper()} template",
                    t.content,
                    f"vcnty_items_template.{fmt}",
                    "text/csv" if fmt == "csv"
                        else "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                    key=f"dl_tpl_{fmt}",
                )
            except Exception as e:
                st.error(f"Failed to fetch template: {e}")

    uploaded = st.file_uploader("Select item manifest (CSV or XLSX, max 10MB)", type=["csv", "xlsx"], key="items_upl")
    if uploaded is not None and uploaded.size > MAX_UPLOAD_BYTES:
        st.error("File too large. Please upload less than 10MB.")
        uploaded = None

    ready = uploaded is not None and bool(store_id) and _online
    if uploaded is not None and not store_id:
        st.warning("Enter a store ID in the sidebar first.")

    if st.button("Confirm & Upload Catalog", disabled=not ready, key="btn_import"):
        with st.spinner("Processing manifest..."):
            try:
                files = {"file": (uploaded.name, uploaded.getvalue(), getattr(uploaded, "type", "text/csv"))}
                r = requests.post(
                    f"{API_URL}/api/stores/{store_id}/items/import",
                    files=files,
                    headers=auth_headers(token),
                    timeout=300,
                )
                if r.ok:
                    st.session_state["last_import"] = r.json()
                    if st.session_state["last_import"].get("success", 0) > 0:
                        # inventory changed upstream
                        fetch_store_items.clear()
                else:
                    st.error(f"API error: {r.status_code} — {r.text}")
            except Exception as e:
                st.error(f"Request failed: {e}")

    rep = st.session_state.get("last_import")
    if rep:
        report_card(rep)

        errors = rep.get("errors", [])
        if errors:
            st.write("**Import error log**")
            st.code("\n".join(f"[{i}] {err}" for i, err in enumerate(errors, start=1)))
            try:
                log = requests.post(f"{API_URL}/api/import/errors.csv", json={"errors": errors}, timeout=30)
                st.download_button("⬇️ Download error log", log.content, "vcnty_import_errors.csv", "text/csv", key="dl_errors")
            except Exception as e:
                st.error(f"Download failed: {e}")

        ignored = rep.get("ignored_columns", [])
        if ignored:
            st.caption(f"{len(ignored)} column(s) were ignored: {', '.join(ignored)}")

        if rep.get("success", 0) > 0:
            st.success(f"Successfully listed {rep['success']} items in VCNTY! 🚀")

# ------------------ Inventory ------------------
with tabs[1]:
    if not store_id:
        st.info("Enter a store ID in the sidebar to see its inventory.")
    elif not _online:
        st.warning("API offline.")
    else:
        page = st.session_state["items_page"]
        nav = st.columns([1, 1, 6])
        if nav[0].button("← Prev", disabled=page == 0, key="btn_prev"):
            st.session_state["items_page"] = page - 1
            st.rerun()
        if nav[1].button("Next →", key="btn_next"):
            st.session_state["items_page"] = page + 1
            st.rerun()
        try:
            items = fetch_store_items(store_id, token, page)
            if items:
                st.dataframe(pd.DataFrame(items))
            else:
                st.caption("No items on this page.")
        except Exception as e:
            st.error(f"Failed to load inventory: {e}")

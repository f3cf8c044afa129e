"""
Chat page: pick PDFs, choose one and ask questions about it.

Run with ``streamlit run pdfchat/ui/streamlit_app.py``; the API location comes
from ``API_BASE_URL``.
"""

import streamlit as st

from pdfchat.client import ChatClient, UploadedFile

st.set_page_config(page_title="PDF Chat", page_icon="📄")

if "client" not in st.session_state:
    st.session_state.client = ChatClient()
    st.session_state.picked_files = ()

client: ChatClient = st.session_state.client

st.title("Ask Questions About Multiple PDFs")

uploads = st.file_uploader("Upload PDFs", type="pdf", accept_multiple_files=True) or []

# A different set of picked files starts a new conversation
picked = tuple((u.name, u.size) for u in uploads)
if picked != st.session_state.picked_files:
    st.session_state.picked_files = picked
    client.set_files(UploadedFile(name=u.name, content=u.getvalue()) for u in uploads)

if client.files:
    names = client.file_names
    index = names.index(client.selected_file) if client.selected_file in names else None
    choice = st.selectbox("Select File:", names, index=index, placeholder="Select a file")
    client.select_file(choice)

for message in client.transcript:
    with st.chat_message("user" if message.role == "user" else "assistant"):
        st.markdown(f"**{message.file_name}:** {message.content}")

with st.form("question_form", clear_on_submit=True):
    question = st.text_input("Question", placeholder="Enter your question")
    submitted = st.form_submit_button(
        "Processing..." if client.loading else "Ask Question",
        disabled=not client.can_submit
    )

if submitted:
    client.set_question(question)
    with st.spinner("Processing..."):
        client.submit()
    st.rerun()

if client.error:
    st.error(client.error)

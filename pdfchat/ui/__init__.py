"""
Streamlit front end for the PDF Chat service.
"""

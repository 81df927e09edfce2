"""
Resume export backend - segmentation, templates and PDF/DOCX/TXT rendering
"""

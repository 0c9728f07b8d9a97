"""Conversion of Document AI result dictionaries into structured documents, hOCR and fields."""
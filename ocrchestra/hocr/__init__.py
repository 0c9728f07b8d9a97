"""Object model, parsing and text extraction for hOCR documents."""
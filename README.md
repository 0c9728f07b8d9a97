# ocrchestra

`ocrchestra` is a library for working with OCR results. It has two parts:

- **`ocrchestra.hocr`** covers hOCR documents. It parses them into a tree of plain Python dataclasses. The tree runs from pages to content areas, paragraphs, lines and words, and each level has its bounding box, language and metadata. It can also extract the recognised text.
- **`ocrchestra.gdocai`** covers Document AI results, given as the JSON dictionaries the service returns. It turns them into a structured document model and an hOCR tree. It also pulls out form fields and custom extractor fields as nested dictionaries.

## Installation

```
pip install ocrchestra
```

To run the test suite:

```
pip install "ocrchestra[test]"
pytest
```

## Reading hOCR

```python
from ocrchestra.hocr.parse import parse_bounding_box_from_title, parse_hocr, parse_title
from ocrchestra.hocr.text import extract_hocr_text

with open("document.hocr", "rb") as fh:
    doc = parse_hocr(fh.read())

for page in doc.pages:
    print(page.id, page.bbox, page.image_name)

print(extract_hocr_text(doc))

parse_title("bbox 100 200 300 400; x_wconf 95")
# {'bbox': ['100', '200', '300', '400'], 'x_wconf': ['95']}

parse_bounding_box_from_title("bbox 1 2 3 4")
# BoundingBox(x1=1.0, y1=2.0, x2=3.0, y2=4.0)
```

`parse_hocr` accepts either bytes or a string.

- **Encoding.** If the data declares a `charset` other than utf-8, it is read as ISO-8859-1.
- **Document metadata.** The `ocr-system`, `ocr-capabilities`, `ocr-number-of-pages` and `ocr-langs` meta tags are kept in `HOCR.metadata`.
- **Element metadata.** Title properties other than the bounding box are kept in each element's `metadata`.
- **Errors.** Input with no `ocr_page` element raises `HocrParseError`.

`extract_hocr_text` writes each text line as its words followed by spaces, and ends the line with a newline. Each page ends with a blank line. A line with the same id is written only once per page.

The model classes are in `ocrchestra.hocr.types`:

- `HOCR`
- `Page`
- `Area`
- `Paragraph`
- `Line`
- `Word`
- `BoundingBox`

Each element class carries its hOCR class name as `hocr_class`, for example `"ocrx_word"`.

## Working with Document AI results

```python
import json

from ocrchestra.gdocai.convert import create_hocr_struct
from ocrchestra.gdocai.fields import extract_custom_extractor_fields, extract_form_fields
from ocrchestra.gdocai.helpers import extract_image_from_page, to_json
from ocrchestra.gdocai.model import document_from_dict

with open("response.json", encoding="utf-8") as fh:
    raw = json.load(fh)

document = document_from_dict(raw)
print(document.text)
print(document.form_fields)
print(document.custom_extractor_fields)

for page in document.pages:
    for block in page.blocks:
        for paragraph in block.paragraphs:
            print(paragraph.text)

hocr_doc = create_hocr_struct(raw)
image_bytes = extract_image_from_page(document.pages[0])
print(to_json(document.form_fields))
```

### The document model

`document_from_dict` returns a `Document` with these members:

- the raw dictionary;
- its pages, sorted by page number;
- the full text;
- the hOCR tree;
- both field mappings.

Each `Page` holds its tokens, lines, paragraphs, blocks and form fields. Lines, paragraphs and blocks are nested by the text spans they cover.

### hOCR conversion

`create_hocr_struct` and `create_hocr_page` place page coordinates in the hOCR tree. They scale the normalised vertices by the page dimensions.

`create_hocr_document` works from a document dictionary, or from `None` with pages passed to it:

- **Language.** It takes the most frequent detected language, or `"unknown"` without a document.
- **Metadata.** It records the page count and the languages used.

### Field extraction

`extract_form_fields` collects form fields from every page:

- Names are stripped of surrounding whitespace and one trailing colon.
- A name that repeats with a different value becomes a list of values.

`extract_custom_extractor_fields` turns entities into a nested mapping:

- Entities that have properties become nested dictionaries.
- An entity's own mention text is kept under `"_value"`.
- Repeated entity types with distinct values become lists.

### Helpers

`ocrchestra.gdocai.layout.text_from_layout` returns the text that a layout's text anchor points at. The segment indices are clamped to the text.

`extract_image_from_page` returns a page's image bytes. It decodes base64 content, and raises `ImageExtractionError` when the page has no image or the image is empty.

`to_json` renders dataclasses and mappings as indented JSON:

- dataclass fields keep their order;
- mapping keys are sorted;
- bytes are written as base64.

## What this package does not do

- **No requests to Document AI.** It works only on result dictionaries you already have.
- **No hOCR HTML output.** It builds hOCR object trees but does not write them back out as HTML.
- **No PDF output.** It does not build searchable PDFs or add text layers to existing PDFs, and it does not detect OCR layers in PDFs. The `ocrchestra.pdfocr` package is present but holds no modules.
- **No command-line tool.** It is a library only.
"""Namespace for PDF output; it holds no modules yet."""
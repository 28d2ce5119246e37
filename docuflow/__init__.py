"""DocuFlow document-processing core.

PDF text-line reconstruction and opening-balance spreadsheet import.
"""

__version__ = "0.1.0"

"""
Persistence gateways.

- sheets_gateway.py: Google Sheets worksheet mirror (gspread)
- offline.py: stand-in used when no spreadsheet is configured
- rows.py: TaskRecord <-> sheet row mapping
"""

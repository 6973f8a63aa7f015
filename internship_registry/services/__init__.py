"""
Services module - get-or-create and the spreadsheet import.
"""

"""
Package marker for the spreadsheet row store in `src.workbook`.
Tabs are tables, the first row is the header, and every cell is read back as a display string.
"""

"""
Package marker for ministry-list reading in `src.ministries`.
Covers the app's own Ministries layout, heuristic detection of arbitrary layouts, and tab ranking.
"""

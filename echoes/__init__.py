"""
echoes: shell-history activity heatmap.

Turns sparse daily command counts into a month/week calendar grid with
log-scale intensity buckets.
"""

"""
Single-group league simulator: double round-robin scheduling, weekly
progression with random results, standings and naive title predictions.
"""

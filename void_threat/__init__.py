"""
Void Threat rules engine: role balancing, phase flow, night resolution and win conditions.
"""

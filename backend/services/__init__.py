"""
Game services: search and other algorithms used by players and the engine.
"""

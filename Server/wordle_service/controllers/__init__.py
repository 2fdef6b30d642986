"""
Controllers Package

HTTP blueprints mapping requests onto the game engine and word corpus.
"""

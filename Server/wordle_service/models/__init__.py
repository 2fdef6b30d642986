"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import GameSession, GameStatus, GuessResult, LetterStatus, SessionView

__all__ = ['GameSession', 'GameStatus', 'GuessResult', 'LetterStatus', 'SessionView']

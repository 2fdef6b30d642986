"""
Game Logger Module for the Wordle Session Service

This module provides structured logging for user actions, server responses,
game events and errors. Entries are JSON objects, one per line, written to a
dated log file.
"""

import logging
import json
import os
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path


class GameLogger:
    """
    Centralized logging system for the session service.

    Features:
    - User action tracking with IP/owner identification
    - Server response logging
    - Game event logging (sessions started, guesses, wins, losses)
    - JSON structured logs for easy parsing
    """

    def __init__(self, log_dir: str = "logs", level: str = "INFO"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.level = getattr(logging, level.upper(), logging.INFO)

        # Setup main game logger
        self.logger = self._setup_logger()

    def _log_file(self) -> Path:
        return self.log_dir / f"game_log_{datetime.now().strftime('%Y-%m-%d')}.log"

    def _setup_logger(self) -> logging.Logger:
        """
        Configure the shared 'wordle_game' logger.

        Every entry goes to the dated log file at the configured level; the
        console only receives warnings and errors.
        """
        logger = logging.getLogger('wordle_game')
        logger.setLevel(self.level)
        logger.propagate = False

        # Re-creating the logger (tests, app reloads) must not stack handlers
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        handlers = [
            (logging.FileHandler(self._log_file(), encoding='utf-8'), self.level,
             '%(asctime)s | %(levelname)s | %(message)s'),
            (logging.StreamHandler(), logging.WARNING,
             '%(levelname)s: %(message)s'),
        ]
        for handler, level, fmt in handlers:
            handler.setLevel(level)
            handler.setFormatter(logging.Formatter(fmt, datefmt='%Y-%m-%d %H:%M:%S'))
            logger.addHandler(handler)

        return logger

    def _get_user_identity(self, request) -> Dict[str, Optional[str]]:
        """Extract user identity information from request."""
        return {
            'user_ip': request.remote_addr or 'unknown',
            'owner_id': getattr(request, 'owner_id', None)
        }

    def _create_log_entry(self,
                          event_type: str,
                          action: str,
                          user_info: Dict[str, Optional[str]],
                          details: Dict[str, Any]) -> str:
        """Create a structured log entry."""
        log_entry = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'user': user_info,
            'details': details
        }
        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def log_user_action(self,
                        request,
                        action: str,
                        session_id: Optional[str] = None,
                        **kwargs):
        """
        Log user actions with full context.

        Args:
            request: Flask request object
            action: Type of action (e.g., 'start_game', 'submit_guess', 'get_game')
            session_id: Session identifier if applicable
            **kwargs: Additional details to log
        """
        details = {
            'session_id': session_id,
            'endpoint': request.endpoint,
            'method': request.method,
            'url': request.url,
            **kwargs
        }

        log_message = self._create_log_entry('USER_ACTION', action, self._get_user_identity(request), details)
        self.logger.info(log_message)

    def log_server_response(self,
                            request,
                            action: str,
                            success: bool,
                            response_data: Dict[str, Any],
                            session_id: Optional[str] = None,
                            **kwargs):
        """
        Log server responses with full context.

        Args:
            request: Flask request object
            action: Action that was performed
            success: Whether the action succeeded
            response_data: Data being returned to client
            session_id: Session identifier if applicable
            **kwargs: Additional details to log
        """
        details = {
            'session_id': session_id,
            'success': success,
            'response_size': len(str(response_data)),
            'response_data': self._sanitize_response_data(response_data),
            **kwargs
        }

        event_type = 'SERVER_RESPONSE_SUCCESS' if success else 'SERVER_RESPONSE_ERROR'
        log_message = self._create_log_entry(event_type, action, self._get_user_identity(request), details)

        if success:
            self.logger.info(log_message)
        else:
            self.logger.error(log_message)

    def log_game_event(self,
                       session_id: Optional[str],
                       event: str,
                       owner_id: Optional[str] = None,
                       **kwargs):
        """
        Log game-specific events (starts, guesses, wins, losses).

        Args:
            session_id: Session identifier
            event: Type of game event (e.g., 'game_started', 'game_won', 'game_lost')
            owner_id: Owning player, None for anonymous sessions
            **kwargs: Additional game details
        """
        user_info = {'user_ip': None, 'owner_id': owner_id}
        details = {
            'session_id': session_id,
            **kwargs
        }

        log_message = self._create_log_entry('GAME_EVENT', event, user_info, details)
        self.logger.info(log_message)

    def log_error(self,
                  request,
                  error: Exception,
                  action: str,
                  session_id: Optional[str] = None):
        """
        Log a failed request.

        Client errors (status below 500) are logged as warnings, anything
        else as an error.
        """
        status_code = getattr(error, 'status_code', 500)
        details = {
            'session_id': session_id,
            'error_type': type(error).__name__,
            'error_message': str(error),
            'status_code': status_code
        }

        log_message = self._create_log_entry('ERROR', action, self._get_user_identity(request), details)
        if status_code < 500:
            self.logger.warning(log_message)
        else:
            self.logger.error(log_message)

    def _sanitize_response_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Summarize session payloads and keep the answer out of the logs."""
        if not isinstance(data, dict):
            return {'data_type': type(data).__name__}

        sanitized = data.copy()

        if 'data' in sanitized and isinstance(sanitized['data'], dict):
            payload = sanitized['data']
            if 'status' in payload:
                sanitized['data'] = {
                    'status': payload.get('status'),
                    'remaining_guesses': payload.get('remaining_guesses'),
                    'guesses_count': len(payload.get('guesses', [])),
                    'valid': payload.get('valid'),
                    'answer_revealed': payload.get('target_word') is not None
                }

        return sanitized

    def get_log_stats(self) -> Dict[str, Any]:
        """Count today's entries per event type for the health endpoint."""
        log_file = self._log_file()
        if not log_file.exists():
            return {'error': 'No log file found for today'}

        counts = {'USER_ACTION': 0, 'SERVER_RESPONSE': 0, 'GAME_EVENT': 0, 'ERROR': 0, 'OTHER': 0}
        total = 0
        try:
            with open(log_file, 'r', encoding='utf-8') as f:
                for line in f:
                    message = line.split(' | ', 2)[-1].strip()
                    if not message:
                        continue
                    total += 1
                    try:
                        event_type = json.loads(message).get('event_type', '')
                    except (ValueError, AttributeError):
                        event_type = ''
                    if event_type.startswith('SERVER_RESPONSE'):
                        event_type = 'SERVER_RESPONSE'
                    counts[event_type if event_type in counts else 'OTHER'] += 1
            size_mb = round(log_file.stat().st_size / (1024 * 1024), 2)
        except OSError as e:
            return {'error': f'Failed to get stats: {e}'}

        return {
            'log_file': str(log_file),
            'file_size_mb': size_mb,
            'total_entries': total,
            'user_actions': counts['USER_ACTION'],
            'server_responses': counts['SERVER_RESPONSE'],
            'game_events': counts['GAME_EVENT'],
            'errors': counts['ERROR'],
            'other': counts['OTHER']
        }


# Global logger instance
game_logger = GameLogger(os.getenv('LOG_DIR', 'logs'), os.getenv('LOG_LEVEL', 'INFO'))

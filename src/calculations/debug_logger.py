"""
Debug logging framework for LEV calculations
Centralizes and standardizes debug output across the calculation engine
"""

import os
import logging
from typing import Any, Dict, List, Optional
import json


class LEVDebugLogger:
    """Centralized debug logger for the LEV calculation engine"""

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._setup_logger()
            LEVDebugLogger._initialized = True

    def _setup_logger(self):
        """Initialize the logging configuration"""
        env_val = str(os.environ.get("LEV_DEBUG_EXPORT", "")).strip().lower()
        self.debug_enabled = env_val in {"1", "true", "yes", "on"}

        debug_level = os.environ.get("LEV_DEBUG_LEVEL", "INFO").upper()

        self.logger = logging.getLogger('lev_debug')
        self.logger.setLevel(getattr(logging, debug_level, logging.INFO))
        self.logger.handlers.clear()

        # Only add handlers if debug is enabled
        if self.debug_enabled:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(logging.DEBUG)

            formatter = logging.Formatter(
                '%(asctime)s [LEV-%(levelname)s] %(component)s: %(message)s',
                datefmt='%H:%M:%S'
            )
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

            if os.environ.get("LEV_DEBUG_FILE"):
                file_handler = logging.FileHandler('lev_debug.log')
                file_handler.setLevel(logging.DEBUG)
                file_handler.setFormatter(formatter)
                self.logger.addHandler(file_handler)

    def _log(self, level: int, component: str, message: str, data: Optional[Dict[str, Any]] = None):
        if not self.debug_enabled:
            return
        if data:
            message = f"{message} {self._format_debug_data(data)}"
        self.logger.log(level, message, extra={'component': component})

    def debug(self, component: str, message: str, data: Optional[Dict[str, Any]] = None):
        """Log debug message with component context"""
        self._log(logging.DEBUG, component, message, data)

    def info(self, component: str, message: str, data: Optional[Dict[str, Any]] = None):
        """Log info message with component context"""
        self._log(logging.INFO, component, message, data)

    def warning(self, component: str, message: str, data: Optional[Dict[str, Any]] = None):
        """Log warning message with component context"""
        self._log(logging.WARNING, component, message, data)

    def error(self, component: str, message: str, error: Optional[Exception] = None, data: Optional[Dict[str, Any]] = None):
        """Log error message with component context"""
        if error:
            message += f" Error: {str(error)}"
        self._log(logging.ERROR, component, message, data)

    def _format_debug_data(self, data: Dict[str, Any]) -> str:
        """Format debug data for logging"""
        formatted = {}
        for key, value in data.items():
            if key.endswith('_pa') or key.endswith('_ms') or key in ('velocity', 'loss'):
                if isinstance(value, (int, float)):
                    formatted[key] = f"{float(value):.1f}"
                else:
                    formatted[key] = value
            elif key.endswith('_mm') or key.endswith('_m3h'):
                formatted[key] = float(value) if isinstance(value, (int, float)) else value
            else:
                formatted[key] = value
        return json.dumps(formatted, separators=(',', ':'), default=str)

    def log_calculation_start(self, component: str, calculation_type: str, element_count: Optional[int] = None):
        """Log the start of a calculation"""
        data = {'calculation_type': calculation_type}
        if element_count is not None:
            data['element_count'] = element_count
        self.info(component, "Starting calculation", data)

    def log_calculation_end(self, component: str, calculation_type: str, success: bool, result_summary: Optional[Dict] = None):
        """Log the end of a calculation"""
        status = "completed" if success else "failed"
        data = {'calculation_type': calculation_type, 'status': status}
        if result_summary:
            data.update(result_summary)
        self.info(component, "Calculation finished", data)

    def log_element_processing(self, component: str, element_type: str, element_id: str,
                               loss_pa: Optional[float] = None,
                               velocity_ms: Optional[float] = None,
                               diameter_mm: Optional[float] = None):
        """Log element processing details"""
        data = {
            'element_type': element_type,
            'element_id': element_id
        }
        if loss_pa is not None:
            data['loss_pa'] = loss_pa
        if velocity_ms is not None:
            data['velocity_ms'] = velocity_ms
        if diameter_mm is not None:
            data['diameter_mm'] = diameter_mm
        self.debug(component, "Processing element", data)

    def log_validation_result(self, component: str, warnings: List[str]):
        """Log validation results"""
        data = {'warning_count': len(warnings)}
        if warnings:
            data['warnings'] = warnings
            self.warning(component, "Validation produced warnings", data)
        else:
            self.info(component, "Validation passed", data)


# Global logger instance
debug_logger = LEVDebugLogger()

"""
Loader konfiguracji z automatycznym uzupełnianiem wartości domyślnych.

Wszystkie stałe mechaniki są trzymane w data/defaults.yaml:
- game: parametry mechaniki (GameParams)
- session: platforma i język (SessionConfig)
- autoplay: ustawienia skryptowego demo z main.py

Szablony budowli są w osobnym pliku data/templates.yaml (klucz `templates`).

Logika merge (uzupełniania defaults):
    1. Wczytaj defaults.yaml - zawiera wartości bazowe
    2. Opcjonalnie wczytaj plik użytkownika (--config)
    3. Nałóż słownik nadpisań (np. z requestu API)
    4. Zbuduj zwalidowany GameParams

Przykład:
    defaults.yaml:
        game:
            grid_radius: 5
            capture_hold_duration_ticks: 6

    my_config.yaml:
        game:
            grid_radius: 10     # nadpisuje default
            # capture_hold_duration_ticks nie podane -> 6 z defaults

Użycie:
    >>> loader = ConfigLoader("data/")
    >>> params = loader.load_params({"grid_radius": 10})
    >>> params.capture_hold_duration_ticks   # z defaults
    6
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Optional
import copy
import yaml

from .params import GameParams, SessionConfig


DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent.parent / "data"


class ConfigLoader:
    """
    Ładuje konfigurację z plików YAML z automatycznym merge defaults.

    Attributes:
        data_path (Path): Ścieżka do folderu data/
        _defaults (Dict): Cache wczytanych defaults
        _templates (Dict): Cache surowych definicji szablonów

    Example:
        >>> loader = ConfigLoader()
        >>> loader.get_game_defaults()["game_tick_rate"]
        12
    """

    def __init__(self, data_path: Optional[str] = None):
        """
        Inicjalizuje loader z ścieżką do danych.

        Args:
            data_path: Ścieżka do folderu z plikami YAML
                       (domyślnie data/ w katalogu projektu)
        """
        self.data_path = Path(data_path) if data_path else DEFAULT_DATA_PATH
        self._defaults: Optional[Dict] = None
        self._templates: Optional[Dict] = None

    # ─────────────────────────────────────────────────────────────────────────
    # WCZYTYWANIE PLIKÓW
    # ─────────────────────────────────────────────────────────────────────────

    def _load_yaml(self, filepath: Path) -> Dict:
        """
        Wczytuje plik YAML.

        Raises:
            FileNotFoundError: Jeśli plik nie istnieje
        """
        with open(filepath, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    def get_defaults(self) -> Dict:
        """
        Zwraca słownik z wartościami domyślnymi.

        Cache'uje wczytany plik - kolejne wywołania są szybkie.
        """
        if self._defaults is None:
            self._defaults = self._load_yaml(self.data_path / "defaults.yaml")
        return self._defaults

    def get_game_defaults(self) -> Dict:
        """Sekcja `game` z defaults.yaml."""
        return self.get_defaults().get("game", {})

    def get_session_defaults(self) -> Dict:
        """Sekcja `session` z defaults.yaml."""
        return self.get_defaults().get("session", {})

    def get_autoplay_config(self) -> Dict:
        """Sekcja `autoplay` z defaults.yaml (ustawienia demo CLI)."""
        return self.get_defaults().get("autoplay", {})

    # ─────────────────────────────────────────────────────────────────────────
    # SZABLONY BUDOWLI
    # ─────────────────────────────────────────────────────────────────────────

    def _get_all_templates_raw(self) -> Dict:
        """Surowe definicje z templates.yaml (cache)."""
        if self._templates is None:
            data = self._load_yaml(self.data_path / "templates.yaml")
            self._templates = data.get("templates", {})
        return self._templates

    def get_template_ids(self) -> List[str]:
        """Lista ID szablonów w kolejności z pliku."""
        return list(self._get_all_templates_raw().keys())

    def load_template(self, template_id: str) -> Dict:
        """
        Zwraca surową definicję szablonu.

        Raises:
            KeyError: Jeśli szablonu nie ma w templates.yaml
        """
        templates = self._get_all_templates_raw()
        if template_id not in templates:
            raise KeyError(f"Template '{template_id}' not found in templates.yaml")
        return copy.deepcopy(templates[template_id])

    def load_all_templates(self) -> Dict[str, Dict]:
        """Wszystkie surowe definicje szablonów (kopie)."""
        return copy.deepcopy(self._get_all_templates_raw())

    # ─────────────────────────────────────────────────────────────────────────
    # BUDOWANIE KONFIGURACJI
    # ─────────────────────────────────────────────────────────────────────────

    def load_merged(self, user_config: Optional[str] = None) -> Dict:
        """
        Zwraca defaults połączone z plikiem użytkownika.

        Args:
            user_config: Ścieżka do dodatkowego pliku YAML (opcjonalnie)

        Returns:
            Dict: Pełna konfiguracja

        Raises:
            FileNotFoundError: Jeśli plik użytkownika nie istnieje
        """
        result = copy.deepcopy(self.get_defaults())
        if user_config:
            result = self._deep_merge(result, self._load_yaml(Path(user_config)))
        return result

    def load_params(
        self,
        overrides: Optional[Dict[str, Any]] = None,
        user_config: Optional[str] = None,
    ) -> GameParams:
        """
        Buduje GameParams z defaults, pliku użytkownika i nadpisań.

        Args:
            overrides: Nadpisania pojedynczych parametrów sekcji `game`
            user_config: Ścieżka do dodatkowego pliku YAML

        Returns:
            GameParams: Zwalidowane parametry

        Raises:
            KeyError: Jeśli overrides zawiera nieznany parametr
            ValueError: Jeśli wynikowa konfiguracja jest niespójna
        """
        game = self.load_merged(user_config).get("game", {})

        overrides = overrides or {}
        known = set(GameParams().to_dict().keys())
        unknown = [key for key in overrides if key not in known]
        if unknown:
            raise KeyError(f"Unknown game parameters: {unknown}. Available: {sorted(known)}")

        game = self._deep_merge(game, overrides)
        return GameParams.from_dict(game)

    def load_session_config(
        self,
        overrides: Optional[Dict[str, Any]] = None,
        user_config: Optional[str] = None,
    ) -> SessionConfig:
        """
        Buduje SessionConfig (platforma, język, parametry gry).

        Args:
            overrides: Nadpisania parametrów gry
            user_config: Ścieżka do dodatkowego pliku YAML
        """
        session = self.load_merged(user_config).get("session", {})
        return SessionConfig(
            platform=session.get("platform", "null"),
            language=session.get("language", "en"),
            params=self.load_params(overrides, user_config),
            max_history=session.get("max_history", SessionConfig.max_history),
            max_events=session.get("max_events", SessionConfig.max_events),
        )

    # ─────────────────────────────────────────────────────────────────────────
    # HELPERY
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def _deep_merge(base: Dict, override: Dict) -> Dict:
        """
        Głęboko łączy dwa słowniki.

        Override nadpisuje wartości w base.
        Nested dicts są merge'owane rekurencyjnie.
        """
        result = copy.deepcopy(base)

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = ConfigLoader._deep_merge(result[key], value)
            else:
                result[key] = copy.deepcopy(value)

        return result

    def reload(self) -> None:
        """Czyści cache i wymusza ponowne wczytanie plików."""
        self._defaults = None
        self._templates = None

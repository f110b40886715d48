"""
hexforage - deterministyczna symulacja zbierania kolorów na siatce hex.

Protagonista chodzi po dysku hexów, przechwytuje kolory z sąsiednich
pól (ładowanie -> rzut -> sukces/porażka -> cooldown) i wymienia je
z 6-slotowym hotbarem. Liczba jednostek koloru w grze jest stała.

Podpakiety:
- core: współrzędne hex, siatka, A*, RNG, konfiguracja
- state: niemutowalny snapshot gry
- capture: maszyna stanów przechwycenia
- inventory: hotbar i wymiana z polem focus
- movement: ruch protagonisty, focus, auto-ruch
- simulation: tick, komendy, silnik, sesja
- events: log zdarzeń JSON
- platform: hooki platformy hostującej
- templates: szablony budowli i śledzenie ich postępu
"""

__version__ = "0.1.0"

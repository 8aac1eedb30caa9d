"""Alarm synthesis and playback using numpy + QSoundEffect.

Every alarm is generated programmatically as a WAV file using sine-wave
synthesis with ADSR envelopes.  Files are cached to disk so subsequent
launches are instant.

Alarm names
-----------
- ``soft``         — two gentle rising notes
- ``traditional``  — alarm-clock beep-beep-beep-beep
- ``pac``          — arcade-style falling chirps
- ``calm``         — soft meditation bell
- ``bell``         — bright bell with overtones

``none`` is accepted everywhere and plays nothing.
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

logger = logging.getLogger(__name__)


# ── paths ────────────────────────────────────────────────────────────────

APP_DIR = Path.home() / ".tamostudy"
SOUNDS_DIR = APP_DIR / "sounds"

ALARM_NAMES = (
    "soft",
    "traditional",
    "pac",
    "calm",
    "bell",
)
SILENT = "none"

SAMPLE_RATE = 44100


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _make_envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.ones(length, dtype=np.float64)
    # Attack
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    # Decay
    d_end = min(a + decay, length)
    if decay > 0 and d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    # Sustain
    s_end = max(length - release, d_end)
    if s_end > d_end:
        env[d_end:s_end] = sustain_level
    # Release
    if release > 0 and s_end < length:
        env[s_end:] = np.linspace(sustain_level, 0.0, length - s_end)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _sweep(start_freq: float, end_freq: float, duration_s: float) -> np.ndarray:
    """Sine wave gliding linearly from *start_freq* to *end_freq*."""
    n = int(SAMPLE_RATE * duration_s)
    freqs = np.linspace(start_freq, end_freq, n, endpoint=False)
    phase = 2 * np.pi * np.cumsum(freqs) / SAMPLE_RATE
    return np.sin(phase)


def _silence(duration_s: float) -> np.ndarray:
    return np.zeros(int(SAMPLE_RATE * duration_s))


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  ALARM GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_soft() -> bytes:
    """Two gentle notes, E5 then A5."""
    parts: list[np.ndarray] = []
    for freq in (659.25, 880.0):
        tone = _sine(freq, 0.3) * 0.4
        env = _make_envelope(len(tone), attack=400, decay=2000, sustain_level=0.4, release=6000)
        parts.append(tone * env)
        parts.append(_silence(0.08))
    return _to_wav_bytes(np.concatenate(parts))


def _generate_traditional() -> bytes:
    """Alarm clock: four short 1 kHz beeps with a touch of third harmonic."""
    parts: list[np.ndarray] = []
    for _ in range(4):
        tone = _sine(1000.0, 0.09) * 0.45 + _sine(3000.0, 0.09) * 0.1
        env = _make_envelope(len(tone), attack=50, decay=100, sustain_level=0.9, release=200)
        parts.append(tone * env)
        parts.append(_silence(0.07))
    return _to_wav_bytes(np.concatenate(parts))


def _generate_pac() -> bytes:
    """Arcade chirps, each one falling an octave."""
    parts: list[np.ndarray] = []
    for start in (990.0, 880.0, 784.0):
        chirp = _sweep(start, start / 2, 0.12) * 0.4
        env = _make_envelope(len(chirp), attack=60, decay=300, sustain_level=0.6, release=800)
        parts.append(chirp * env)
        parts.append(_silence(0.04))
    return _to_wav_bytes(np.concatenate(parts))


def _generate_calm() -> bytes:
    """Soft meditation bell (A4, 440Hz), slow attack, long decay."""
    duration = 1.2
    combined = _sine(440.0, duration) * 0.35 + _sine(880.0, duration) * 0.08
    env = _make_envelope(
        len(combined),
        attack=int(SAMPLE_RATE * 0.08),
        decay=int(SAMPLE_RATE * 0.3),
        sustain_level=0.25,
        release=int(SAMPLE_RATE * 0.7),
    )
    return _to_wav_bytes(combined * env)


def _generate_bell() -> bytes:
    """Bright bell (C6) with inharmonic partials and exponential decay."""
    duration = 1.5
    t = np.linspace(0, duration, int(SAMPLE_RATE * duration), endpoint=False)
    partials = (1.0, 2.76, 5.40)
    weights = (0.5, 0.2, 0.08)
    combined = sum(
        w * np.sin(2 * np.pi * 1046.5 * p * t) for p, w in zip(partials, weights)
    )
    return _to_wav_bytes(combined * np.exp(-3.0 * t))


# Map alarm names to generator functions
_GENERATORS = {
    "soft": _generate_soft,
    "traditional": _generate_traditional,
    "pac": _generate_pac,
    "calm": _generate_calm,
    "bell": _generate_bell,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Manages alarm synthesis, caching, and playback.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(70)
        mgr.play("bell")
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

        self._ensure_wav_files()
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def set_volume(self, level: int) -> None:
        """Set volume (0-100).  Updates all loaded effects."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def play(self, name: str) -> None:
        """Play an alarm by name.  ``"none"`` and unknown names are no-ops."""
        if name == SILENT:
            return
        effect = self._effects.get(name)
        if effect is None:
            logger.debug("No alarm called %r", name)
            return
        effect.play()

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def loaded(self) -> tuple[str, ...]:
        return tuple(self._effects)

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files to the cache directory."""
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name, gen_fn in _GENERATORS.items():
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(gen_fn())

    def _load_effects(self) -> None:
        """Create QSoundEffect instances from cached WAV files."""
        for name in ALARM_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if path.exists():
                effect = QSoundEffect(self)
                effect.setSource(QUrl.fromLocalFile(str(path)))
                effect.setVolume(self._volume)
                self._effects[name] = effect

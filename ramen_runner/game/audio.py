# ramen_runner/game/audio.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, Optional

import pygame

logger = logging.getLogger(__name__)

SOUND_FILES = {
    "jump": "jump.mp3",
    "collision": "collision.mp3",
    "powerup": "powerup.mp3",
}
MUSIC_FILE = "music.mp3"


class AudioCues:
    """
    Fire-and-forget cue player. Pass an instance as RunState's `on_cue`.
    Missing files or an unavailable mixer turn cues into no-ops.
    """

    def __init__(self, audio_dir: Optional[Path] = None):
        self.muted = False
        self.music_started = False
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        self.music_path: Optional[Path] = None
        self.enabled = self._init_mixer()
        if self.enabled and audio_dir is not None:
            self._load(Path(audio_dir))

    def _init_mixer(self) -> bool:
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
        except pygame.error as e:
            logger.warning("Audio disabled: %s", e)
            return False
        return True

    def _load(self, audio_dir: Path):
        for cue, fname in SOUND_FILES.items():
            path = audio_dir / fname
            try:
                self.sounds[cue] = pygame.mixer.Sound(str(path))
            except (pygame.error, FileNotFoundError) as e:
                logger.warning("Failed to load sound %s: %s", path, e)
        music = audio_dir / MUSIC_FILE
        if music.exists():
            self.music_path = music
        else:
            logger.warning("Background music not found: %s", music)

    def __call__(self, cue: str):
        if not self.enabled:
            return
        if cue == "music_start":
            self._play_music()
        elif cue == "music_stop":
            pygame.mixer.music.stop()
        elif not self.muted and cue in self.sounds:
            self.sounds[cue].play()

    def _play_music(self):
        if self.muted or self.music_path is None:
            return
        try:
            pygame.mixer.music.load(str(self.music_path))
            pygame.mixer.music.play(loops=-1)
            self.music_started = True
        except pygame.error as e:
            logger.warning("Music playback failed: %s", e)

    def toggle_mute(self):
        self.muted = not self.muted
        if not self.enabled:
            return
        if self.muted:
            pygame.mixer.music.stop()
        else:
            self._play_music()

"""Mixing of loaded sounds into a 16-bit interleaved stereo stream."""

from __future__ import annotations

import enum
import math
import struct
import threading
from array import array
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from goldfish.file import open_file

DEFAULT_SAMPLE_RATE = 44100

MOD_SIGNATURES = (
    b"M!K!", b"M.K.", b"FLT4", b"FLT8", b"4CHN", b"6CHN", b"8CHN", b"10CH",
    b"12CH", b"14CH", b"16CH", b"18CH", b"20CH", b"22CH", b"24CH", b"26CH",
    b"28CH", b"30CH", b"32CH",
)

_XM_MAGIC = b"Extended Module: "
_MP3_SYNC = (0xFB, 0xF3, 0xF2)

_WAVE_PCM = 1
_WAVE_FLOAT = 3
_WAVE_EXTENSIBLE = 0xFFFE

_STRUCT_SAMPLES = {
    (_WAVE_PCM, 16): ("<h", 32768.0),
    (_WAVE_PCM, 32): ("<i", 2147483648.0),
    (_WAVE_FLOAT, 32): ("<f", 1.0),
    (_WAVE_FLOAT, 64): ("<d", 1.0),
}
_SUPPORTED = set(_STRUCT_SAMPLES) | {(_WAVE_PCM, 8), (_WAVE_PCM, 24)}


class AudioDecodeError(ValueError):
    """Audio data could not be decoded."""


class AudioFormat(enum.Enum):
    """Container formats recognised by their leading bytes."""

    XM = "xm"
    MOD = "mod"
    MP3 = "mp3"
    FLAC = "flac"
    WAV = "wav"


class PlayState(enum.IntEnum):
    """Playback state of a loaded sound."""

    OVER = -2
    PAUSED = -1
    IDLE = 0
    PLAYING = 1


def detect_format(data: bytes) -> Optional[AudioFormat]:
    """Recognise the format of ``data``, or return None."""
    data = bytes(data)
    size = len(data)
    if size > 37 and data.startswith(_XM_MAGIC) and data[37] == 0x1A:
        return AudioFormat.XM
    if size > 1080 and data[1080:1084] in MOD_SIGNATURES:
        return AudioFormat.MOD
    if (size > 2 and data[0] == 0xFF and data[1] in _MP3_SYNC) or (
        size > 3 and data.startswith(b"ID3")
    ):
        return AudioFormat.MP3
    if size > 4 and data.startswith(b"fLaC"):
        return AudioFormat.FLAC
    if size >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WAVE":
        return AudioFormat.WAV
    return None


class WavDecoder:
    """Decoder of RIFF WAVE data into floating-point samples."""

    def __init__(self, data: bytes) -> None:
        data = bytes(data)
        if len(data) < 12 or data[:4] != b"RIFF" or data[8:12] != b"WAVE":
            raise AudioDecodeError("not a RIFF WAVE stream")
        fmt: Optional[bytes] = None
        samples: Optional[bytes] = None
        pos = 12
        while pos + 8 <= len(data):
            chunk_id = data[pos:pos + 4]
            (size,) = struct.unpack_from("<I", data, pos + 4)
            body = data[pos + 8:pos + 8 + size]
            if chunk_id == b"fmt " and fmt is None:
                fmt = body
            elif chunk_id == b"data" and samples is None:
                samples = body
            pos += 8 + size + (size & 1)
        if fmt is None or len(fmt) < 16:
            raise AudioDecodeError("missing or short fmt chunk")
        if samples is None:
            raise AudioDecodeError("missing data chunk")

        tag, channels, rate, _byte_rate, _align, bits = struct.unpack_from("<HHIIHH", fmt)
        if tag == _WAVE_EXTENSIBLE:
            if len(fmt) < 26:
                raise AudioDecodeError("short extensible fmt chunk")
            (tag,) = struct.unpack_from("<H", fmt, 24)
        if channels == 0 or rate == 0:
            raise AudioDecodeError("invalid channel count or sample rate")
        if (tag, bits) not in _SUPPORTED:
            raise AudioDecodeError(f"unsupported sample format {tag} with {bits} bits")

        self.channels = channels
        self.sample_rate = rate
        self._tag = tag
        self._bits = bits
        self._frame_size = channels * (bits // 8)
        self.frame_count = len(samples) // self._frame_size
        self._samples = samples[:self.frame_count * self._frame_size]
        self.position = 0

    def read_frames(self, count: int) -> List[float]:
        """Read up to ``count`` frames as interleaved samples in [-1, 1]."""
        count = max(0, min(count, self.frame_count - self.position))
        start = self.position * self._frame_size
        raw = self._samples[start:start + count * self._frame_size]
        self.position += count
        return self._convert(raw)

    def _convert(self, raw: bytes) -> List[float]:
        if self._bits == 8:
            return [(byte - 128) / 128.0 for byte in raw]
        if self._bits == 24:
            return [
                int.from_bytes(raw[i:i + 3], "little", signed=True) / 8388608.0
                for i in range(0, len(raw), 3)
            ]
        code, scale = _STRUCT_SAMPLES[(self._tag, self._bits)]
        return [value / scale for (value,) in struct.iter_unpack(code, raw)]


@dataclass
class _Voice:
    decoder: WavDecoder
    state: PlayState = PlayState.PAUSED
    auto_destroy: bool = False


def _to_int16(value: float) -> int:
    return max(-32768, min(32767, int(value)))


class AudioMixer:
    """Loaded sounds, each paused, playing or over, mixed on demand."""

    def __init__(self, sample_rate: int = DEFAULT_SAMPLE_RATE) -> None:
        self.sample_rate = sample_rate
        self.volume = 1.0
        self._voices: Dict[int, _Voice] = {}
        self._lock = threading.RLock()

    def load(self, data: bytes) -> int:
        """Load a sound, paused, and return its id."""
        kind = detect_format(data)
        if kind not in (None, AudioFormat.WAV):
            raise AudioDecodeError(f"no decoder available for {kind.name} audio")
        decoder = WavDecoder(data)
        with self._lock:
            key = 0
            while key in self._voices:
                key += 1
            self._voices[key] = _Voice(decoder)
            return key

    def load_file(self, path: str, resources: Optional[Mapping[str, bytes]] = None) -> int:
        """Load a sound from a file or a ``base:/`` resource."""
        with open_file(path, "r", resources) as handle:
            data = handle.read()
        return self.load(data)

    def mix(self, frames: int) -> array:
        """Mix ``frames`` stereo frames of all playing sounds as signed 16-bit samples."""
        if frames < 0:
            raise ValueError("frame count must not be negative")
        mixed = [0.0] * (frames * 2)
        with self._lock:
            for voice in self._voices.values():
                if voice.state == PlayState.PLAYING:
                    self._mix_voice(voice, mixed, frames)
            finished = [
                key
                for key, voice in self._voices.items()
                if voice.auto_destroy and voice.state == PlayState.OVER
            ]
            for key in finished:
                del self._voices[key]
            volume = self.volume
        return array("h", (_to_int16(sample * volume * 32768) for sample in mixed))

    def _mix_voice(self, voice: _Voice, mixed: List[float], frames: int) -> None:
        decoder = voice.decoder
        ratio = self.sample_rate / decoder.sample_rate
        want = int(frames / ratio)
        samples = decoder.read_frames(want)
        channels = decoder.channels
        got = len(samples) // channels
        for j in range(min(frames, math.ceil(got * ratio))):
            ind = int(j / ratio)
            if channels == 1:
                left = right = samples[ind]
            else:
                left = samples[channels * ind]
                right = samples[channels * ind + 1]
            mixed[2 * j] += left
            mixed[2 * j + 1] += right
        if got < want:
            voice.state = PlayState.OVER

    def _set_state(self, id: int, state: PlayState) -> None:
        with self._lock:
            voice = self._voices.get(id)
            if voice is not None:
                voice.state = state

    def resume(self, id: int) -> None:
        """Start or continue playing a sound."""
        self._set_state(id, PlayState.PLAYING)

    def pause(self, id: int) -> None:
        """Pause a sound."""
        self._set_state(id, PlayState.PAUSED)

    def stop(self, id: int) -> None:
        """Unload a sound."""
        with self._lock:
            self._voices.pop(id, None)

    def auto_destroy(self, id: int) -> None:
        """Unload a sound automatically once it has played to the end."""
        with self._lock:
            voice = self._voices.get(id)
            if voice is not None:
                voice.auto_destroy = True

    def is_over(self, id: int) -> bool:
        """True if the sound has played to the end; False for unknown ids."""
        with self._lock:
            voice = self._voices.get(id)
            return voice is not None and voice.state == PlayState.OVER

    def close(self) -> None:
        """Unload every sound."""
        with self._lock:
            self._voices.clear()
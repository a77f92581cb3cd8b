from voidcutterlib.media.wav_io import get_wav_info
from voidcutterlib.media.wav_io import load_wav
from voidcutterlib.media.wav_io import save_wav
from voidcutterlib.media.validation import validate_audio_files

__all__ = [
	'get_wav_info',
	'load_wav',
	'save_wav',
	'validate_audio_files',
]

#!/usr/bin/env python3

# Standard Library
import os
import wave

# PIP3 modules
import numpy

# local repo modules
from voidcutterlib.audio.buffer import SampleBuffer
from voidcutterlib.core import utils

SUPPORTED_SAMPLE_WIDTHS = (2, 3, 4)

#============================================

def get_wav_info(wav_path: str) -> dict:
	"""
	Get wav metadata without decoding samples.

	Args:
		wav_path: Wav file path.

	Returns:
		dict: channels, sample_rate, sample_width, bit_depth, total_frames, duration.
	"""
	utils.ensure_file_exists(wav_path)
	try:
		with wave.open(wav_path, 'rb') as wav_handle:
			channels = wav_handle.getnchannels()
			sample_rate = wav_handle.getframerate()
			sample_width = wav_handle.getsampwidth()
			total_frames = wav_handle.getnframes()
	except (wave.Error, EOFError) as exc:
		raise RuntimeError(f"invalid WAV file: {wav_path}: {exc}") from exc
	if sample_rate <= 0:
		raise RuntimeError(f"audio sample rate must be positive: {wav_path}")
	if channels <= 0:
		raise RuntimeError(f"audio channel count must be positive: {wav_path}")
	return {
		'channels': channels,
		'sample_rate': sample_rate,
		'sample_width': sample_width,
		'bit_depth': sample_width * 8,
		'total_frames': total_frames,
		'duration': total_frames / float(sample_rate),
	}

#============================================

def decode_pcm(data: bytes, sample_width: int) -> numpy.ndarray:
	"""
	Decode little-endian signed PCM bytes into int32 samples.
	"""
	if sample_width == 2:
		return numpy.frombuffer(data, dtype='<i2').astype(numpy.int32)
	if sample_width == 4:
		return numpy.frombuffer(data, dtype='<i4').astype(numpy.int32)
	if sample_width == 3:
		raw = numpy.frombuffer(data, dtype=numpy.uint8)
		raw = raw[:(raw.size // 3) * 3].reshape(-1, 3).astype(numpy.int32)
		samples = raw[:, 0] | (raw[:, 1] << 8) | (raw[:, 2] << 16)
		# sign extend the 24-bit value
		samples = numpy.where(samples >= 0x800000, samples - 0x1000000, samples)
		return samples.astype(numpy.int32)
	raise RuntimeError(f"unsupported wav sample width: {sample_width} bytes")

#============================================

def encode_pcm(samples: numpy.ndarray, sample_width: int) -> bytes:
	"""
	Encode int32 samples as little-endian signed PCM bytes.
	"""
	if sample_width == 2:
		return samples.astype('<i2').tobytes()
	if sample_width == 4:
		return samples.astype('<i4').tobytes()
	if sample_width == 3:
		packed = samples.astype('<i4').view(numpy.uint8).reshape(-1, 4)[:, :3]
		return packed.tobytes()
	raise RuntimeError(f"unsupported wav sample width: {sample_width} bytes")

#============================================

def load_wav(wav_path: str) -> SampleBuffer:
	"""
	Load a PCM wav file into a SampleBuffer.

	Args:
		wav_path: Wav file path.

	Returns:
		SampleBuffer: Decoded samples, filename set to wav_path.
	"""
	info = get_wav_info(wav_path)
	sample_width = info['sample_width']
	if sample_width not in SUPPORTED_SAMPLE_WIDTHS:
		raise RuntimeError(
			f"unsupported wav bit depth {info['bit_depth']} in {wav_path}, "
			"expected 16, 24 or 32"
		)
	with wave.open(wav_path, 'rb') as wav_handle:
		data = wav_handle.readframes(info['total_frames'])
	samples = decode_pcm(data, sample_width)
	channels = info['channels']
	frame_count = samples.size // channels
	if samples.size != frame_count * channels:
		samples = samples[:frame_count * channels]
	return SampleBuffer(samples, info['sample_rate'], channels,
		bit_depth=info['bit_depth'], filename=wav_path)

#============================================

def save_wav(buffer: SampleBuffer, wav_path: str) -> str:
	"""
	Write a SampleBuffer as a PCM wav file.

	Args:
		buffer: Audio to write.
		wav_path: Output wav path.

	Returns:
		str: The written path.
	"""
	if buffer.bit_depth not in (16, 24, 32):
		raise RuntimeError(f"cannot encode bit depth {buffer.bit_depth} to wav")
	sample_width = buffer.bit_depth // 8
	out_dir = os.path.dirname(wav_path)
	if out_dir:
		os.makedirs(out_dir, exist_ok=True)
	with wave.open(wav_path, 'wb') as wav_handle:
		wav_handle.setnchannels(buffer.channel_count)
		wav_handle.setsampwidth(sample_width)
		wav_handle.setframerate(buffer.sample_rate)
		wav_handle.writeframes(encode_pcm(buffer.samples, sample_width))
	if not os.path.isfile(wav_path):
		raise RuntimeError(f"failed to write wav file: {wav_path}")
	return wav_path

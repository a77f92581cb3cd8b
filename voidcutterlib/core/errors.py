#!/usr/bin/env python3

#============================================

class ConfigurationError(RuntimeError):
	"""
	Invalid settings or input set; the whole run stops before writing output.
	"""
	pass

"""Limites e constantes para validação de mensagens WhatsApp/Meta."""

import re

# Formato Cloud API: código do país + número, sem `+` (8 a 15 dígitos)
PHONE_NUMBER_PATTERN = re.compile(r"^[1-9]\d{7,14}$")

# Chaves de variável aceitas na API de envio: var1, var2, ...
VARIABLE_KEY_PATTERN = re.compile(r"^var(\d+)$")

# Chaves de índice puro ("1", "2", ...), apenas dígitos ASCII
INDEX_KEY_PATTERN = re.compile(r"[0-9]+")

# Caracteres removidos de valores livres vindos do chamador
UNSAFE_INPUT_PATTERN = re.compile(r"[<>\"'&\x00]")

ALLOWED_IMAGE_URL_SCHEMES = frozenset({"http", "https"})

#!/usr/bin/env python3
"""
ArpSweep - Internationalization (i18n)
Copyright (C) 2025  Dorin Badea
GPLv3 License

Translation strings for English and Spanish.
"""

import locale
import os
from typing import Optional

from arpsweep.utils.constants import DEFAULT_LANG

TRANSLATIONS = {
    "en": {
        "interrupted": "\n⚠️  Interruption received. Aborting scan...",
        "prompt_target": "Enter network to scan (e.g., 192.168.1.0/24):",
        "invalid_cidr": "Invalid CIDR: {}",
        "privileges_note": "Note: This program requires elevated privileges.",
        "privileges_linux": "On Linux, run with sudo (e.g., 'sudo arpsweep').",
        "privileges_windows": (
            "On Windows, run as Administrator (e.g., from an elevated Command Prompt or PowerShell)."
        ),
        "scan_start": "Scanning {} ({} hosts), listening {:.1f}s after sending...",
        "scan_results": "Scan Results",
        "col_ip": "IP Address",
        "col_mac": "MAC Address",
        "col_vendor": "Manufacturer",
        "no_hosts": "No hosts replied within the listening window.",
        "hosts_found": "{} host(s) found in {:.1f}s",
        "unprobed_hosts": "{} host(s) could not be probed (send failed): {}",
        "receive_errors": "{} receive error(s) during listening (see log)",
        "scan_ok": "Scan completed successfully",
        "scan_error": "Error: {}",
        "registry_missing": (
            "{} file not found. Ensure it's in the same directory as the executable "
            "or pass --oui."
        ),
        "no_interface_linux": (
            "No suitable network interface found. Ensure you're running with root "
            "privileges (e.g., sudo)."
        ),
        "no_interface_windows": (
            "No suitable network interface found. Ensure you're running with "
            "administrative privileges."
        ),
        "interface_unusable": "Interface {} not found or not usable (down, loopback, or no IP/MAC).",
        "channel_linux": "{}. Ensure you're running with sudo.",
        "channel_windows": "{}. Ensure you're running as Administrator.",
        "interfaces_header": "Local interfaces",
        "col_iface": "Interface",
        "col_state": "State",
        "col_usable": "Usable",
        "state_up": "up",
        "state_down": "down",
        "yes": "yes",
        "no": "no",
        "defaults_saved": "Defaults saved to {}",
        "defaults_save_failed": "Could not save defaults",
    },
    "es": {
        "interrupted": "\n⚠️  Interrupción recibida. Abortando escaneo...",
        "prompt_target": "Introduce la red a escanear (p. ej., 192.168.1.0/24):",
        "invalid_cidr": "CIDR inválido: {}",
        "privileges_note": "Nota: este programa requiere privilegios elevados.",
        "privileges_linux": "En Linux, ejecuta con sudo (p. ej., 'sudo arpsweep').",
        "privileges_windows": (
            "En Windows, ejecuta como Administrador (p. ej., desde un símbolo del sistema elevado)."
        ),
        "scan_start": "Escaneando {} ({} hosts), escuchando {:.1f}s tras el envío...",
        "scan_results": "Resultados del escaneo",
        "col_ip": "Dirección IP",
        "col_mac": "Dirección MAC",
        "col_vendor": "Fabricante",
        "no_hosts": "Ningún host respondió dentro de la ventana de escucha.",
        "hosts_found": "{} host(s) encontrados en {:.1f}s",
        "unprobed_hosts": "{} host(s) no pudieron sondearse (fallo de envío): {}",
        "receive_errors": "{} error(es) de recepción durante la escucha (ver log)",
        "scan_ok": "Escaneo completado correctamente",
        "scan_error": "Error: {}",
        "registry_missing": (
            "No se encontró {}. Asegúrate de que está en el mismo directorio que el "
            "ejecutable o usa --oui."
        ),
        "no_interface_linux": (
            "No se encontró una interfaz de red adecuada. Asegúrate de ejecutar con "
            "privilegios de root (p. ej., sudo)."
        ),
        "no_interface_windows": (
            "No se encontró una interfaz de red adecuada. Asegúrate de ejecutar con "
            "privilegios de administrador."
        ),
        "interface_unusable": "Interfaz {} no encontrada o no utilizable (caída, loopback, o sin IP/MAC).",
        "channel_linux": "{}. Asegúrate de ejecutar con sudo.",
        "channel_windows": "{}. Asegúrate de ejecutar como Administrador.",
        "interfaces_header": "Interfaces locales",
        "col_iface": "Interfaz",
        "col_state": "Estado",
        "col_usable": "Utilizable",
        "state_up": "activa",
        "state_down": "inactiva",
        "yes": "sí",
        "no": "no",
        "defaults_saved": "Valores por defecto guardados en {}",
        "defaults_save_failed": "No se pudieron guardar los valores por defecto",
    },
}


def get_text(key: str, lang: str = "en", *args) -> str:
    """
    Get translated text for a given key.

    Args:
        key: Translation key
        lang: Language code ('en' or 'es')
        *args: Format arguments

    Returns:
        Translated and formatted string
    """
    lang_dict = TRANSLATIONS.get(lang, TRANSLATIONS[DEFAULT_LANG])
    val = lang_dict.get(key, key)
    return val.format(*args) if args else val


def detect_preferred_language(preferred: Optional[str] = None) -> str:
    """
    Detect preferred language for the CLI (en/es).

    Priority:
    1) Explicit preference (if valid)
    2) Environment (LC_ALL, LC_MESSAGES, LANG)
    3) System locale
    4) Fallback: en
    """

    if preferred in TRANSLATIONS:
        return preferred

    def _map(val: str) -> Optional[str]:
        if not val:
            return None
        raw = val.strip()
        if not raw:
            return None
        # Examples: es_ES.UTF-8, en_US, es-ES, C.UTF-8
        raw = raw.split(".", 1)[0].split("@", 1)[0]
        raw = raw.replace("-", "_")
        code = raw.split("_", 1)[0].lower()
        return code if code in TRANSLATIONS else None

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        detected = _map(os.environ.get(var, ""))
        if detected:
            return detected

    try:
        detected = _map(locale.getlocale()[0] or "")
        if detected:
            return detected
    except ValueError:  # nosec
        pass

    return DEFAULT_LANG

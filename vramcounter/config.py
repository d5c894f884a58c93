from __future__ import annotations

APP_NAME = "VRAM Counter"
APP_VERSION = "1.10.0"

# Game constants (values for Starsector 0.9.1a)
VANILLA_BACKGROUND_WIDTH = 2048
VANILLA_BACKGROUND_TEXTURE_SIZE_IN_BYTES = 12582912
VANILLA_GAME_VRAM_USAGE_IN_BYTES = 433586176

UNUSED_SUFFIX = "_CURRENTLY_UNUSED"
BACKGROUND_FOLDER_NAME = "backgrounds"

# GraphicsLib ships the map-override CSVs
GRAPHICSLIB_MOD_ID = "shaderLib"

MOD_INFO_FILE_NAME = "mod_info.json"
ENABLED_MODS_FILE_NAME = "enabled_mods.json"
OUTPUT_FILE_NAME = "VRAM_usage_of_mods.txt"
SETTINGS_FILE_NAME = "vram_counter_settings.json"
LEGACY_SETTINGS_FILE_NAME = "config.properties"

OUTPUT_LABEL_WIDTH = 38

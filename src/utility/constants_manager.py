
from dotenv import load_dotenv, find_dotenv
import os

from src.services.image_file_codec.models.codec_models import CodecOptions


class ConstantsManager:
    _dotenv_loaded = False

    def __init__(self):
        if not ConstantsManager._dotenv_loaded:
            load_dotenv(dotenv_path=find_dotenv(usecwd=True), override=False)
            ConstantsManager._dotenv_loaded = True

    def get_variable(self, variableName, default=None):
        variable = os.environ.get(variableName, "")
        if variable == "":
            if default is not None:
                return default
            raise Exception(f"Could not find {variableName} environment variable")
        return variable

    def get_int(self, variableName, default):
        value = self.get_variable(variableName, str(default))
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"{variableName} must be an integer, got {value!r}")

    def get_float(self, variableName, default):
        value = self.get_variable(variableName, str(default))
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"{variableName} must be a number, got {value!r}")

    def get_bool(self, variableName, default):
        value = self.get_variable(variableName, "true" if default else "false").strip().lower()
        if value in ("1", "true", "yes", "on"):
            return True
        if value in ("0", "false", "no", "off"):
            return False
        raise ValueError(f"{variableName} must be a boolean, got {value!r}")

    def get_capacity_reserve(self):
        return self.get_int('IMG_FU_CAPACITY_RESERVE', 1000)

    def get_max_utilization(self):
        return self.get_float('IMG_FU_MAX_UTILIZATION', 99.9)

    def get_legacy_capacity(self):
        return self.get_bool('IMG_FU_LEGACY_CAPACITY', False)

    def get_output_dir(self):
        return self.get_variable('IMG_FU_OUTPUT_DIR', 'stego')

    def get_recovered_dir(self):
        return self.get_variable('IMG_FU_RECOVERED_DIR', 'stego_recovered')

    def get_log_level(self):
        return self.get_variable('IMG_FU_LOG_LEVEL', 'INFO').upper()

    def get_codec_options(self):
        try:
            return CodecOptions(
                reserve_pixels=self.get_capacity_reserve(),
                max_utilization_percent=self.get_max_utilization(),
                legacy_capacity=self.get_legacy_capacity(),
            )
        except ValueError as exc:
            raise ValueError(f"Invalid codec configuration: {exc}") from exc

import unittest

from vramcounter.core.texture_size import (
    build_image_asset,
    bytes_used,
    round_up_to_power_of_two,
    texture_bytes,
)
from vramcounter.models import CATEGORY_BACKGROUND, CATEGORY_TEXTURE


class TestTextureSize(unittest.TestCase):
    def test_round_up_to_power_of_two(self):
        cases = {1: 1, 2: 2, 3: 4, 4: 4, 5: 8, 64: 64, 65: 128, 1000: 1024, 2047: 2048, 2048: 2048}
        for dim, expected in cases.items():
            self.assertEqual(round_up_to_power_of_two(dim), expected, dim)

    def test_single_pixel_texture_rounds_up(self):
        self.assertEqual(bytes_used(1, 1, [8, 8, 8, 8], CATEGORY_TEXTURE), 6)

    def test_mipmap_multiplier_ceiling(self):
        # 3x3 -> 4x4, 4 bytes per pixel, 64 * 4/3 = 85.33
        self.assertEqual(bytes_used(3, 3, [8, 8, 8, 8], CATEGORY_TEXTURE), 86)
        # 16x16 RGB is exact
        self.assertEqual(bytes_used(16, 16, [8, 8, 8], CATEGORY_TEXTURE), 1024)

    def test_background_at_vanilla_size_is_zero(self):
        # 2048 * 2048 * 3 bytes == vanilla background
        self.assertEqual(bytes_used(2048, 2048, [8, 8, 8], CATEGORY_BACKGROUND), 0)

    def test_background_reports_excess_only(self):
        self.assertEqual(bytes_used(4096, 4096, [8, 8, 8], CATEGORY_BACKGROUND), 37748736)
        self.assertLess(bytes_used(1024, 1024, [8, 8, 8], CATEGORY_BACKGROUND), 0)

    def test_monotonic_in_dims_and_bits(self):
        previous = -1
        for dim in (1, 2, 4, 8, 16, 32, 64, 128):
            current = texture_bytes(dim, dim, [8, 8, 8, 8], CATEGORY_TEXTURE)
            self.assertGreater(current, previous)
            previous = current

        by_bits = [bytes_used(64, 64, bits, CATEGORY_TEXTURE) for bits in ([8], [8, 8], [8, 8, 8], [8, 8, 8, 8])]
        self.assertEqual(by_bits, sorted(by_bits))

    def test_build_image_asset_swaps_axes(self):
        asset = build_image_asset(
            path="/mods/a/graphics/x.png",
            relpath="graphics/x.png",
            name="x.png",
            width=100,
            height=300,
            channel_bits=[8, 8, 8, 8],
            category=CATEGORY_TEXTURE,
        )
        self.assertEqual(asset.texture_height, 128)
        self.assertEqual(asset.texture_width, 512)
        self.assertEqual(asset.channel_bits, (8, 8, 8, 8))
        self.assertEqual(asset.bytes_used, bytes_used(100, 300, [8, 8, 8, 8], CATEGORY_TEXTURE))


if __name__ == "__main__":
    unittest.main()

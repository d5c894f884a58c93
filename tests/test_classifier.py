import tempfile
import unittest
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from PIL import Image

from tests.fixtures import write_png
from vramcounter.core.classifier import classify_relpath, decode_asset, read_image_assets
from vramcounter.core.image_reader import channel_bits_for, read_header
from vramcounter.core.scanner import list_mod_files
from vramcounter.models import CATEGORY_BACKGROUND, CATEGORY_TEXTURE, CATEGORY_UNUSED


class TestClassifier(unittest.TestCase):
    def test_categories(self):
        self.assertEqual(classify_relpath("graphics/backgrounds/nebula.jpg"), CATEGORY_BACKGROUND)
        self.assertEqual(classify_relpath("graphics/ships/old_CURRENTLY_UNUSED.png"), CATEGORY_UNUSED)
        self.assertEqual(classify_relpath("graphics/_CURRENTLY_UNUSED/ship.png"), CATEGORY_UNUSED)
        self.assertEqual(classify_relpath("graphics/ships/frigate.png"), CATEGORY_TEXTURE)

    def test_background_wins_over_unused(self):
        self.assertEqual(
            classify_relpath("graphics/backgrounds/old_CURRENTLY_UNUSED.png"),
            CATEGORY_BACKGROUND,
        )

    def test_custom_unused_indicators(self):
        self.assertEqual(classify_relpath("graphics/wip/ship.png", unused_indicators=["/wip/"]), CATEGORY_UNUSED)
        self.assertEqual(classify_relpath("graphics/ships/_CURRENTLY_UNUSED.png", unused_indicators=["/wip/"]), CATEGORY_TEXTURE)

    def test_classification_is_deterministic(self):
        path = "graphics/ships/frigate_CURRENTLY_UNUSED.png"
        self.assertEqual(classify_relpath(path), classify_relpath(path))


class TestDecoding(unittest.TestCase):
    def test_channel_bits_from_mode(self):
        self.assertEqual(channel_bits_for("RGBA"), (8, 8, 8, 8))
        self.assertEqual(channel_bits_for("RGB"), (8, 8, 8))
        self.assertEqual(channel_bits_for("L"), (8,))
        self.assertEqual(channel_bits_for("LA"), (8, 8))
        self.assertEqual(channel_bits_for("I;16"), (16,))
        self.assertEqual(channel_bits_for("P"), (8, 8, 8))
        self.assertEqual(channel_bits_for("P", has_transparency=True), (8, 8, 8, 8))

    def test_read_header(self):
        with tempfile.TemporaryDirectory() as td:
            png = write_png(Path(td) / "a.png", (20, 10), mode="L")
            header = read_header(str(png))
            self.assertEqual((header.width, header.height), (20, 10))
            self.assertEqual(header.channel_bits, (8,))

            pal = Path(td) / "p.png"
            Image.new("P", (4, 4)).save(pal, format="PNG", transparency=0)
            self.assertEqual(read_header(str(pal)).channel_bits, (8, 8, 8, 8))

    def test_non_images_are_skipped_with_issue(self):
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            write_png(root / "graphics" / "ship.png", (8, 8))
            (root / "data").mkdir()
            (root / "data" / "notes.txt").write_text("not an image", encoding="utf-8")
            (root / "graphics" / "broken.png").write_bytes(b"\x89PNG\r\n\x1a\n garbage")

            files = list_mod_files(str(root))
            assets, issues = read_image_assets(files)

            self.assertEqual([a.relpath for a in assets], ["graphics/ship.png"])
            skipped = {i.relpath for i in issues}
            self.assertEqual(skipped, {"data/notes.txt", "graphics/broken.png"})
            self.assertTrue(all(i.code == "SKIPPED_NON_IMAGE" for i in issues))

    def test_parallel_decode_matches_sequential(self):
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            for i in range(12):
                write_png(root / "graphics" / f"img_{i:02d}.png", (8 + i, 4 + i))
            files = list_mod_files(str(root))

            sequential, _ = read_image_assets(files)
            with ThreadPoolExecutor(max_workers=4) as pool:
                parallel, _ = read_image_assets(files, pool)

            self.assertEqual(sequential, parallel)

    def test_decode_asset_classifies(self):
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            write_png(root / "graphics" / "backgrounds" / "bg.png", (16, 16), mode="RGB")
            f = list_mod_files(str(root))[0]
            asset, issue = decode_asset(f)
            self.assertIsNone(issue)
            self.assertEqual(asset.category, CATEGORY_BACKGROUND)
            self.assertEqual(asset.channel_bits, (8, 8, 8))


if __name__ == "__main__":
    unittest.main()

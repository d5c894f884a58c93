from __future__ import annotations

import json
from pathlib import Path

from PIL import Image


def _image(path: Path, size, mode="RGBA"):
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new(mode, size).save(path)


def main():
    root = Path("demo_mods")

    ships = root / "DemoShips"
    (ships).mkdir(parents=True, exist_ok=True)
    (ships / "mod_info.json").write_text(
        '{\n  "id": "demo_ships",\n  "name": "Demo Ships",\n'
        '  # 0.9.5a version format\n  "version": {"major": 1, "minor": 2, "patch": 0},\n}\n',
        encoding="utf-8",
    )
    _image(ships / "graphics" / "ships" / "frigate.png", (128, 96))
    _image(ships / "graphics" / "ships" / "frigate_n.png", (128, 96))
    _image(ships / "graphics" / "backgrounds" / "nebula.jpg", (4096, 4096), mode="RGB")
    _image(ships / "graphics" / "ships" / "old_CURRENTLY_UNUSED.png", (512, 512))
    (ships / "data" / "lights").mkdir(parents=True, exist_ok=True)
    (ships / "data" / "lights" / "demo_texture_data.csv").write_text(
        "id,type,map,path\nfrigate,SHIP,normal,graphics/ships/frigate_n.png\n",
        encoding="utf-8",
    )

    portraits = root / "DemoPortraits"
    portraits.mkdir(parents=True, exist_ok=True)
    (portraits / "mod_info.json").write_text(
        '{"id": "demo_portraits", "name": "Demo Portraits", "version": "0.3"}',
        encoding="utf-8",
    )
    _image(portraits / "graphics" / "portraits" / "captain.png", (256, 256))
    _image(portraits / "graphics" / "ships" / "frigate.png", (128, 96))

    (root / "enabled_mods.json").write_text(
        json.dumps({"enabledMods": ["demo_ships"]}, indent=2), encoding="utf-8"
    )

    print(f"Created demo mods folder at: {root.resolve()}")
    print("Run: python -m vramcounter --mods-folder demo_mods --no-prompt")

if __name__ == "__main__":
    main()

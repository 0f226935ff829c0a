# =============================
# FILE: examples/using_clip_service.py
# =============================
"""
Uso mínimo: ClipService cableado desde Settings, sin pasar por el CLI.
Equivale a:
  satclip --idir ... --odir ... --source_crs EPSG:32615 --mask ... \
          --datasets QA_PIXEL,NDVI,EVI --label _clipped
"""
from pathlib import Path

from satclip.composition.di import build_clip_service, build_settings
from satclip.logging_utils import LogOptions, configure_logging
from satclip.services.clip_service import make_request


if __name__ == "__main__":
    root = Path("/ruta/al/proyecto").resolve()
    configure_logging(LogOptions())
    svc = build_clip_service(build_settings())

    req = make_request(
        input_dir=str(root / "LANDSAT" / "SCENES" / "021047"),
        output_dir=str(root / "LANDSAT" / "CLIPPED"),
        source_crs="EPSG:32615",
        mask=str(root / "GIS" / "Vector" / "parcela.shp"),
        datasets=["QA_PIXEL", "NDVI", "EVI"],
        label="_clipped",
    )
    res = svc.run(req)

    print("Recortes:")
    for job in res.jobs:
        print(" -", job.band, job.out_path, f"EPSG:{job.epsg}")
    if not res.ok:
        print("Error:", res.error.stage.value, res.error.message, res.error.detail or "")
    raise SystemExit(res.exit_code)

"""HTML viewer generator — self-contained Three.js page for a layer stack."""

from __future__ import annotations

import html
from pathlib import Path

from layerstack.visualization.scene import Scene


def generate_viewer(scene: Scene, output_path: str | Path, title: str = "Layer Stack") -> Path:
    """Write an HTML page that renders the scene's drawables.

    Solid drawables become translucent boxes, wireframe drawables become box
    edges.  A side panel lists every layer present in the scene with a
    checkbox that hides or shows its boxes.

    Parameters
    ----------
    scene:
        The assembled scene to render.
    output_path:
        Path for the output HTML file; parent directories are created.
    title:
        Page title; the frame index is appended for time series scenes.

    Returns
    -------
    Path
        Path to the generated HTML file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if scene.frame is not None:
        title = f"{title} | frame {scene.frame}"

    camera = scene.camera
    page = _PAGE.format(
        title=html.escape(title),
        scene_json=_script_safe(scene.to_json(indent=None)),
        fov=camera.fov,
        position=", ".join(str(v) for v in camera.position),
        target=", ".join(str(v) for v in camera.target),
        up=", ".join(str(v) for v in camera.up),
    )

    output_path.write_text(page, encoding="utf-8")
    return output_path


def _script_safe(text: str) -> str:
    """Escape JSON for embedding in a <script> element; ids are user input."""
    return text.replace("<", "\\u003c").replace(">", "\\u003e").replace("&", "\\u0026")


# r147 is the last release shipping the global build and examples/js controls
_PAGE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<title>{title}</title>
<style>
  html, body {{ margin: 0; height: 100%; overflow: hidden; background: #fafafa; }}
  #panel {{ position: absolute; top: 12px; left: 12px; padding: 8px 12px;
            background: rgba(255, 255, 255, 0.85); border: 1px solid #ddd;
            font: 13px sans-serif; color: #222; }}
  #panel label {{ display: block; margin-top: 4px; }}
</style>
</head>
<body>
<div id="panel"><strong>{title}</strong><div id="layers"></div></div>
<script src="https://cdn.jsdelivr.net/npm/three@0.147.0/build/three.min.js"></script>
<script src="https://cdn.jsdelivr.net/npm/three@0.147.0/examples/js/controls/OrbitControls.js"></script>
<script>
(function() {{
  const data = {scene_json};
  const view = new THREE.Scene();
  const groups = {{}};

  const camera = new THREE.PerspectiveCamera({fov}, innerWidth / innerHeight, 1, 10000);
  camera.position.set({position});
  camera.up.set({up});

  const renderer = new THREE.WebGLRenderer({{ antialias: true, alpha: true }});
  renderer.setSize(innerWidth, innerHeight);
  document.body.appendChild(renderer.domElement);

  const controls = new THREE.OrbitControls(camera, renderer.domElement);
  controls.target.set({target});
  controls.update();

  data.drawables.forEach(function(d) {{
    if (!groups[d.layer]) {{
      groups[d.layer] = new THREE.Group();
      view.add(groups[d.layer]);
    }}
    const box = new THREE.BoxGeometry(d.footprint[0], d.footprint[1], d.footprint[2]);
    const object = d.wireframe
      ? new THREE.LineSegments(new THREE.EdgesGeometry(box),
          new THREE.LineBasicMaterial({{ color: d.color, transparent: true, opacity: d.opacity }}))
      : new THREE.Mesh(box,
          new THREE.MeshBasicMaterial({{ color: d.color, transparent: true, opacity: d.opacity }}));
    object.position.set(d.position[0], d.position[1], d.position[2]);
    object.name = d.id;
    groups[d.layer].add(object);
  }});

  const list = document.getElementById('layers');
  Object.keys(groups).sort(function(a, b) {{ return a - b; }}).forEach(function(layer) {{
    const label = document.createElement('label');
    const toggle = document.createElement('input');
    toggle.type = 'checkbox';
    toggle.checked = true;
    toggle.onchange = function() {{ groups[layer].visible = toggle.checked; }};
    label.appendChild(toggle);
    label.appendChild(document.createTextNode(' Layer ' + layer));
    list.appendChild(label);
  }});

  addEventListener('resize', function() {{
    camera.aspect = innerWidth / innerHeight;
    camera.updateProjectionMatrix();
    renderer.setSize(innerWidth, innerHeight);
  }});

  (function loop() {{
    requestAnimationFrame(loop);
    renderer.render(view, camera);
  }})();
}})();
</script>
</body>
</html>
"""

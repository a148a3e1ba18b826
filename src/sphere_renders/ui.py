import gradio as gr

from sphere_renders import constants
from sphere_renders.camera import Camera
from sphere_renders.core import Renderer, Scene
from sphere_renders.imaging import to_image
from sphere_renders.primitives import Light, Sphere

CSS = """
.gradio-container { background-color: #0b0f19 !important; color: #e5e7eb !important; }
#output_img { background-color: #0b0f19 !important; border-radius: 8px; overflow: hidden; border: none !important; }
#output_img img { object-fit: contain; image-rendering: pixelated; }
"""


def render_frame(cam_x, cam_y, cam_z, light_x, light_y, light_z, resolution):
    """Render the stock spheres from a custom camera and light position."""
    # Maintain 4:3 aspect ratio
    width = int(resolution)
    height = int(resolution * 0.75)

    scene = Scene(
        camera=Camera((cam_x, cam_y, cam_z), constants.CAMERA_WORLD_UP, constants.CAMERA_LOOK_AT),
        spheres=[Sphere(center, radius) for center, radius in constants.SPHERES],
        light=Light((light_x, light_y, light_z)),
        width=width,
        height=height,
    )
    pixels = Renderer(scene).render_pixels(width, height)
    return to_image(pixels, width, height)


def create_ui():
    cam_x0, cam_y0, cam_z0 = constants.CAMERA_POSITION
    light_x0, light_y0, light_z0 = constants.LIGHT_POSITION

    with gr.Blocks(title="Sphere Renderer") as demo:
        gr.Markdown("# Sphere Renderer")
        gr.Markdown("Ray-cast spheres with hard shadows and Lambertian shading.")

        with gr.Row():
            with gr.Column(scale=1):
                with gr.Group():
                    gr.Markdown("### Camera Position")
                    cam_x = gr.Slider(-10.0, 10.0, value=cam_x0, step=0.1, label="X")
                    cam_y = gr.Slider(-0.5, 10.0, value=cam_y0, step=0.1, label="Y")
                    cam_z = gr.Slider(-10.0, 10.0, value=cam_z0, step=0.1, label="Z")
                with gr.Group():
                    gr.Markdown("### Light Position")
                    light_x = gr.Slider(-10.0, 10.0, value=light_x0, step=0.1, label="X")
                    light_y = gr.Slider(-0.5, 10.0, value=light_y0, step=0.1, label="Y")
                    light_z = gr.Slider(-10.0, 10.0, value=light_z0, step=0.1, label="Z")
                resolution = gr.Slider(64, 1024, value=400, step=16, label="Resolution (width)")

            with gr.Column(scale=3):
                output = gr.Image(label="Render", type="pil", elem_id="output_img")

        inputs = [cam_x, cam_y, cam_z, light_x, light_y, light_z, resolution]
        for control in inputs:
            control.change(fn=render_frame, inputs=inputs, outputs=output, show_progress="hidden")
        demo.load(fn=render_frame, inputs=inputs, outputs=output, show_progress="hidden")

    return demo


def launch_ui():
    demo = create_ui()
    demo.launch(css=CSS)

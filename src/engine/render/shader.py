"""
どこで: `engine.render.shader`。
何を: ModernGL のシェーダプログラム（太線・照明付きサーフェス・背景画像）を生成する。
なぜ: GLSL ソースとユニフォーム名を 1 か所にまとめ、メッシュ/レンダラ側はプログラムを受け取るだけにするため。
"""

from __future__ import annotations

from typing import Any


class Shader:
    """シェーダ生成の名前空間。"""

    # 線分をジオメトリシェーダで画面空間の帯に広げる。線幅はクリップ空間（-1..1 基準）。
    LINE_VERTEX = """
        #version 330
        in vec3 in_vert;
        uniform mat4 projection;  // projection * view * model
        void main() {
            gl_Position = projection * vec4(in_vert, 1.0);
        }
    """

    LINE_GEOMETRY = """
        #version 330
        layout(lines) in;
        layout(triangle_strip, max_vertices = 4) out;
        uniform float line_thickness;
        uniform float aspect;
        void main() {
            vec4 p0 = gl_in[0].gl_Position;
            vec4 p1 = gl_in[1].gl_Position;
            if (p0.w <= 0.0 || p1.w <= 0.0) {
                return;
            }
            vec2 a = p0.xy / p0.w;
            vec2 b = p1.xy / p1.w;
            vec2 d = b - a;
            d.x *= aspect;
            float len = length(d);
            if (len < 1e-8) {
                return;
            }
            vec2 n = vec2(-d.y, d.x) / len;
            n.x /= aspect;
            vec2 off = n * line_thickness * 0.5;

            gl_Position = vec4((a + off) * p0.w, p0.zw);
            EmitVertex();
            gl_Position = vec4((a - off) * p0.w, p0.zw);
            EmitVertex();
            gl_Position = vec4((b + off) * p1.w, p1.zw);
            EmitVertex();
            gl_Position = vec4((b - off) * p1.w, p1.zw);
            EmitVertex();
            EndPrimitive();
        }
    """

    LINE_FRAGMENT = """
        #version 330
        uniform vec4 color;
        out vec4 frag_color;
        void main() {
            frag_color = color;
        }
    """

    # 環境光 + 平行光（拡散 + Blinn-Phong 鏡面）。lit=0 はマテリアル色そのまま。
    SURFACE_VERTEX = """
        #version 330
        in vec3 in_vert;
        in vec3 in_normal;
        uniform mat4 mvp;
        uniform mat4 model;
        uniform mat3 normal_matrix;
        out vec3 v_normal;
        out vec3 v_world;
        void main() {
            v_normal = normalize(normal_matrix * in_normal);
            v_world = (model * vec4(in_vert, 1.0)).xyz;
            gl_Position = mvp * vec4(in_vert, 1.0);
        }
    """

    SURFACE_FRAGMENT = """
        #version 330
        in vec3 v_normal;
        in vec3 v_world;
        uniform vec4 color;
        uniform vec3 specular;
        uniform float shininess;
        uniform vec3 ambient;
        uniform vec3 light_dir;
        uniform vec3 light_color;
        uniform vec3 camera_pos;
        uniform int lit;
        out vec4 frag_color;
        void main() {
            if (lit == 0) {
                frag_color = color;
                return;
            }
            vec3 n = normalize(v_normal);
            if (!gl_FrontFacing) {
                n = -n;
            }
            vec3 l = normalize(light_dir);
            vec3 v = normalize(camera_pos - v_world);
            vec3 h = normalize(l + v);
            float diff = max(dot(n, l), 0.0);
            float spec = diff > 0.0 ? pow(max(dot(n, h), 0.0), shininess) : 0.0;
            vec3 rgb = color.rgb * (ambient + light_color * diff) + specular * light_color * spec;
            frag_color = vec4(rgb, color.a);
        }
    """

    IMAGE_VERTEX = """
        #version 330
        in vec2 in_pos;
        in vec2 in_uv;
        out vec2 v_uv;
        void main() {
            v_uv = in_uv;
            gl_Position = vec4(in_pos, 0.0, 1.0);
        }
    """

    IMAGE_FRAGMENT = """
        #version 330
        in vec2 v_uv;
        uniform sampler2D image;
        out vec4 frag_color;
        void main() {
            frag_color = texture(image, v_uv);
        }
    """

    @staticmethod
    def create_shader(ctx: Any) -> Any:
        """太線描画用プログラム（uniform: projection / line_thickness / aspect / color）。"""
        program = ctx.program(
            vertex_shader=Shader.LINE_VERTEX,
            geometry_shader=Shader.LINE_GEOMETRY,
            fragment_shader=Shader.LINE_FRAGMENT,
        )
        program["aspect"].value = 1.0
        return program

    @staticmethod
    def create_surface_shader(ctx: Any) -> Any:
        return ctx.program(
            vertex_shader=Shader.SURFACE_VERTEX,
            fragment_shader=Shader.SURFACE_FRAGMENT,
        )

    @staticmethod
    def create_image_shader(ctx: Any) -> Any:
        program = ctx.program(
            vertex_shader=Shader.IMAGE_VERTEX,
            fragment_shader=Shader.IMAGE_FRAGMENT,
        )
        program["image"].value = 0
        return program


__all__ = ["Shader"]

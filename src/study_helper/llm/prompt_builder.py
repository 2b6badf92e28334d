"""
Prompt builder for provider requests and locally generated text.

Responsible for:
- Loading and rendering Jinja2 templates
- Constructing GenerationRequest objects for the explain and solve flows
- Rendering the heuristic explanation served while providers are unavailable
- Rendering the non-AI placeholders used when no credential is configured
"""

from pathlib import Path
from typing import Optional

import structlog
from jinja2 import Environment, FileSystemLoader, StrictUndefined

from study_helper.models.llm_models import GenerationRequest


logger = structlog.get_logger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates"


class PromptBuilder:
    """
    Build prompts and fallback texts from Jinja2 templates.
    
    Templates:
    - explain_prompt.txt / tutor_system_prompt.txt: explain flow
    - solve_prompt.txt: solve flow
    - local_explanation.txt: degraded explanation (branches on math subjects)
    - placeholder_explanation.txt / placeholder_solution.txt: unconfigured mode
    """
    
    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        grade_level: str = "10",
    ):
        """
        Initialize prompt builder.
        
        Args:
            templates_dir: Directory containing templates (default: bundled templates)
            grade_level: Class/grade the texts are written for
        """
        self.templates_dir = Path(templates_dir) if templates_dir else DEFAULT_TEMPLATES_DIR
        self.grade_level = grade_level
        
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
            autoescape=False,  # plain-text prompts, not HTML
        )
        
        try:
            self.explain_template = self.jinja_env.get_template("explain_prompt.txt")
            self.system_template = self.jinja_env.get_template("tutor_system_prompt.txt")
            self.solve_template = self.jinja_env.get_template("solve_prompt.txt")
            self.local_explanation_template = self.jinja_env.get_template("local_explanation.txt")
            self.placeholder_explanation_template = self.jinja_env.get_template(
                "placeholder_explanation.txt"
            )
            self.placeholder_solution_template = self.jinja_env.get_template("placeholder_solution.txt")
            logger.info("Loaded prompt templates", templates_dir=str(self.templates_dir))
        except Exception as e:
            logger.error("Failed to load prompt templates", error=str(e))
            raise
    
    def build_explain_request(self, subject: str, topic: str) -> GenerationRequest:
        """Request asking for a short explanation of a topic."""
        prompt = self.explain_template.render(
            subject=subject, topic=topic, grade_level=self.grade_level
        ).strip()
        system_prompt = self.system_template.render(grade_level=self.grade_level).strip()
        return GenerationRequest(prompt=prompt, system_prompt=system_prompt)
    
    def build_solve_request(self, problem: str) -> GenerationRequest:
        """Request asking for a step-by-step solution."""
        prompt = self.solve_template.render(problem=problem).strip()
        return GenerationRequest(prompt=prompt)
    
    def render_local_explanation(self, subject: Optional[str], topic: Optional[str]) -> str:
        """
        Heuristic explanation served while AI output is unavailable.
        
        The text is never cached and always discloses that it is a temporary
        substitute.
        """
        return self.local_explanation_template.render(
            is_math="math" in (subject or "").lower(),
            topic=topic or "this topic",
            grade_level=self.grade_level,
        ).strip()
    
    def render_placeholder_explanation(self, subject: str, topic: str) -> str:
        return self.placeholder_explanation_template.render(subject=subject, topic=topic).strip()
    
    def render_placeholder_solution(self, problem: str) -> str:
        return self.placeholder_solution_template.render(problem=problem).strip()

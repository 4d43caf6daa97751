"""Models for logo prompts and logo results."""

from pydantic import BaseModel, Field

# The generation call always asks for this many variants.
NUM_VARIANTS = 4


class LogoPrompt(BaseModel):
    """Natural-language instruction sent to the image generation model."""

    brand_name: str = Field(..., min_length=1, description="Brand name, already trimmed")
    style: str = Field(default="", description="Optional free-text style description")
    num_variants: int = Field(default=NUM_VARIANTS, ge=1)

    def get_full_prompt(self) -> str:
        """Build the prompt: brand, optional inspiration, then output constraints."""
        prompt = f'A professional, modern logo for a brand named "{self.brand_name}".'
        if self.style.strip():
            prompt += f' The logo should be inspired by: "{self.style}".'
        prompt += (
            f" Please generate {self.num_variants} distinct variations on a clean, solid"
            " background. The logos should be suitable for use on websites and marketing"
            " materials. Do not include any text unless it is part of the brand name itself."
        )
        return prompt


class LogoVariant(BaseModel):
    """One downloadable image of a result set."""

    index: int = Field(..., ge=1, description="1-based position in the result set")
    data_url: str
    filename: str

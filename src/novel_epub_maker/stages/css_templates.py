"""CSS 템플릿 정의

7종 타이포그래피 템플릿 블록과 Folio / Fantasy 장식 구분선(SVG)
"""

from novel_epub_maker.stages.models import CssTemplate

CLASSIC_CSS = """
body {
  font-family: "Latin Modern Roman", "CMU Serif", "STIX Two Text", "Source Serif 4", "Garamond",
    "Georgia", "Times New Roman", serif;
  font-kerning: normal;
  font-variant-ligatures: common-ligatures;
  font-variant-numeric: oldstyle-nums;
  text-rendering: optimizeLegibility;
}
h1, h2, h3, h4 {
  font-family: "Latin Modern Roman", "CMU Serif", "STIX Two Text", "Source Serif 4", "Garamond",
    "Georgia", serif;
  letter-spacing: 0.08em;
}
h2 { font-weight: 600; text-align: center; margin-top: 2em; margin-bottom: 1.2em; }
p {
  text-align: justify;
  text-justify: inter-ideograph;
  line-break: strict;
  word-break: break-word;
  hyphens: auto;
  -webkit-hyphens: auto;
  -moz-hyphens: auto;
  letter-spacing: 0.01em;
  word-spacing: 0.02em;
}
.chapter-label {
  font-size: 0.75em;
  font-variant: small-caps;
  text-transform: none;
  letter-spacing: 0.4em;
  text-align: center;
  color: #444444;
  margin-top: 0.9em;
  margin-bottom: 0.3em;
}
"""

MODERN_CSS = """
body {
  font-family: "Source Serif 4", "Noto Serif", "Georgia", "Times New Roman", serif;
  font-kerning: normal;
}
h1, h2, h3, h4 {
  font-family: "Source Sans 3", "Helvetica Neue", "Helvetica", "Arial", sans-serif;
  letter-spacing: 0.08em;
}
h2 { font-weight: 500; text-align: center; margin-top: 1.5em; margin-bottom: 0.95em; }
p {
  text-align: justify;
  text-justify: inter-ideograph;
  line-break: strict;
  word-break: break-word;
  hyphens: auto;
  -webkit-hyphens: auto;
  -moz-hyphens: auto;
}
.chapter-label {
  font-size: 0.78em;
  color: #2f5d50;
  letter-spacing: 0.25em;
  text-align: center;
  margin-top: 0.6em;
  margin-bottom: 0.2em;
}
"""

CLEAN_CSS = """
body { font-family: "Georgia", "Times New Roman", serif; }
h2 { letter-spacing: 0.04em; font-weight: 600; text-align: center; margin-top: 1.6em; margin-bottom: 1em; }
p {
  text-align: justify;
  text-justify: inter-ideograph;
  line-break: strict;
  word-break: break-word;
  hyphens: auto;
  -webkit-hyphens: auto;
  -moz-hyphens: auto;
}
.chapter-label { font-size: 0.8em; color: #3b3b3b; letter-spacing: 0.2em; text-align: center; }
"""

ELEGANT_CSS = """
body {
  font-family: "Garamond", "Palatino", "Times New Roman", serif;
  font-variant-ligatures: common-ligatures;
  font-variant-numeric: oldstyle-nums;
  text-rendering: optimizeLegibility;
}
h1, h2, h3, h4 {
  font-family: "Garamond", "Palatino", "Times New Roman", serif;
  letter-spacing: 0.06em;
}
h2 { font-weight: 600; text-align: center; margin-top: 2.2em; margin-bottom: 1.2em; }
p {
  text-align: justify;
  text-justify: inter-ideograph;
  line-break: strict;
  word-break: break-word;
  hyphens: auto;
  -webkit-hyphens: auto;
  -moz-hyphens: auto;
  letter-spacing: 0.02em;
  word-spacing: 0.03em;
}
.chapter-label {
  font-size: 0.75em;
  color: #5a4a3b;
  font-variant: small-caps;
  text-transform: none;
  letter-spacing: 0.32em;
  text-align: center;
  margin-top: 1em;
  margin-bottom: 0.35em;
}
"""

FOLIO_CSS = """
body {
  font-family: "Baskerville", "Garamond", "Palatino", "Times New Roman", serif;
  font-variant-ligatures: common-ligatures;
  font-variant-numeric: oldstyle-nums;
  text-rendering: optimizeLegibility;
}
h1, h2, h3, h4 {
  font-family: "Baskerville", "Garamond", "Palatino", "Times New Roman", serif;
  letter-spacing: 0.1em;
}
h2 { font-weight: 600; text-align: center; margin-top: 2.2em; margin-bottom: 1.2em; }
p {
  text-align: justify;
  text-justify: inter-ideograph;
  line-break: strict;
  word-break: break-word;
  hyphens: auto;
  -webkit-hyphens: auto;
  -moz-hyphens: auto;
  letter-spacing: 0.015em;
  word-spacing: 0.04em;
}
.chapter-label {
  font-size: 0.76em;
  color: #5a4a3b;
  font-variant: small-caps;
  letter-spacing: 0.32em;
  text-align: center;
  margin-top: 0.8em;
  margin-bottom: 0.3em;
}
"""

FANTASY_CSS = """
body {
  font-family: "kt", "KaiTi", "STKaiti", "Kaiti SC", "Baskerville", "Garamond", serif;
  font-variant-ligatures: common-ligatures;
  text-rendering: optimizeLegibility;
  color: #2a1e14;
  letter-spacing: 0.02em;
}
h1, h2, h3, h4 {
  font-family: "rbs", "dbs", "KaiTi", "STKaiti", "Kaiti SC", "Garamond", serif;
  letter-spacing: 0.16em;
}
h2 { font-weight: 600; text-align: center; margin-top: 2.4em; margin-bottom: 1.4em; }
p {
  text-align: justify;
  text-justify: inter-ideograph;
  line-break: strict;
  word-break: break-word;
  hyphens: auto;
  -webkit-hyphens: auto;
  -moz-hyphens: auto;
  letter-spacing: 0.02em;
  word-spacing: 0.04em;
}
.chapter-label {
  font-size: 0.78em;
  color: #a66c44;
  font-variant: small-caps;
  letter-spacing: 0.42em;
  text-align: center;
  margin-top: 0.9em;
  margin-bottom: 0.35em;
}
"""

MINIMAL_CSS = """
body { font-family: "Times New Roman", "Georgia", serif; }
h1, h2, h3, h4 { font-family: "Times New Roman", "Georgia", serif; letter-spacing: 0.04em; }
h2 { font-weight: normal; text-align: center; margin-top: 1.4em; margin-bottom: 0.9em; }
p {
  text-align: justify;
  text-justify: inter-ideograph;
  line-break: strict;
  word-break: break-word;
  hyphens: auto;
  -webkit-hyphens: auto;
  -moz-hyphens: auto;
}
.chapter-label { font-size: 0.76em; color: #2f2f2f; letter-spacing: 0.22em; text-align: center; }
"""

TEMPLATE_CSS = {
    CssTemplate.CLASSIC: CLASSIC_CSS,
    CssTemplate.MODERN: MODERN_CSS,
    CssTemplate.CLEAN: CLEAN_CSS,
    CssTemplate.ELEGANT: ELEGANT_CSS,
    CssTemplate.FOLIO: FOLIO_CSS,
    CssTemplate.FANTASY: FANTASY_CSS,
    CssTemplate.MINIMAL: MINIMAL_CSS,
}


def get_template_css(template: CssTemplate) -> str:
    """템플릿의 고정 타이포그래피 블록 반환"""
    return TEMPLATE_CSS[template]


FOLIO_DIVIDER_SVG = """\
<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 600 80">
  <g fill="none" stroke="#6b5b4b" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">
    <path d="M300 40 C270 22 230 18 190 30" />
    <path d="M300 40 C270 58 230 62 190 50" />
    <path d="M190 30 C170 26 150 20 130 10" />
    <path d="M190 50 C170 54 150 60 130 70" />
  </g>
  <g fill="none" stroke="#6b5b4b" stroke-width="2" stroke-linecap="round" stroke-linejoin="round" transform="translate(600,0) scale(-1,1)">
    <path d="M300 40 C270 22 230 18 190 30" />
    <path d="M300 40 C270 58 230 62 190 50" />
    <path d="M190 30 C170 26 150 20 130 10" />
    <path d="M190 50 C170 54 150 60 130 70" />
  </g>
  <g fill="none" stroke="#6b5b4b" stroke-width="2">
    <circle cx="300" cy="40" r="9" />
    <circle cx="300" cy="40" r="3" />
    <path d="M292 40 H308" />
  </g>
</svg>
"""

FANTASY_DIVIDER_SVG = """\
<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 600 90">
  <defs>
    <linearGradient id="g1" x1="0" x2="1">
      <stop offset="0%" stop-color="#a66c44"/>
      <stop offset="50%" stop-color="#bca68a"/>
      <stop offset="100%" stop-color="#a66c44"/>
    </linearGradient>
  </defs>
  <g fill="none" stroke="url(#g1)" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">
    <path d="M300 45 C265 20 220 18 175 30" />
    <path d="M300 45 C265 70 220 72 175 60" />
    <path d="M175 30 C155 24 140 16 124 8" />
    <path d="M175 60 C155 66 140 74 124 82" />
    <path d="M210 34 C196 28 186 26 172 28" />
    <path d="M210 56 C196 62 186 64 172 62" />
  </g>
  <g fill="none" stroke="url(#g1)" stroke-width="2" stroke-linecap="round" stroke-linejoin="round" transform="translate(600,0) scale(-1,1)">
    <path d="M300 45 C265 20 220 18 175 30" />
    <path d="M300 45 C265 70 220 72 175 60" />
    <path d="M175 30 C155 24 140 16 124 8" />
    <path d="M175 60 C155 66 140 74 124 82" />
    <path d="M210 34 C196 28 186 26 172 28" />
    <path d="M210 56 C196 62 186 64 172 62" />
  </g>
  <g fill="none" stroke="url(#g1)" stroke-width="2">
    <circle cx="300" cy="45" r="12" />
    <circle cx="300" cy="45" r="4" />
    <path d="M288 45 H312" />
    <path d="M300 33 L310 45 L300 57 L290 45 Z" />
  </g>
</svg>
"""

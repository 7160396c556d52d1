"""챕터 데이터 구조

분할 엔진이 만들어 렌더러로 넘기는 챕터 초안
"""

from dataclasses import dataclass

UNTITLED_CHAPTER = "Untitled Chapter"


@dataclass(frozen=True)
class ChapterDraft:
    """분할된 챕터 하나

    Attributes:
        title: 챕터 제목 (항상 비어 있지 않음)
        content: 제목 줄을 제외한 본문
    """
    title: str
    content: str

    @classmethod
    def from_raw(cls, raw: str) -> "ChapterDraft":
        """원문 조각에서 챕터 생성 (첫 줄 = 제목, 나머지 = 본문)

        Args:
            raw: 챕터 원문 조각

        Returns:
            ChapterDraft (첫 줄이 비어 있으면 "Untitled Chapter")

        Example:
            >>> ChapterDraft.from_raw("第一章 开始\\n内容")
            <ChapterDraft '第一章 开始' (2 chars)>
        """
        lines = raw.split("\n")
        title = lines[0].strip() if lines else ""
        content = "\n".join(lines[1:])
        return cls(title=title or UNTITLED_CHAPTER, content=content)

    def __repr__(self):
        return f"<ChapterDraft {self.title!r} ({len(self.content)} chars)>"

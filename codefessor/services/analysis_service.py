"""
Analysis service - judge-or-fetch over the result cache.

The Judge runs at most once per interview id: results are written through to
the AnalysisResultRepository and served from it afterwards. Quota placeholders
are the one exception, see get_or_create_analysis.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from authorship_judge import judge_transcript
from codefessor.config import RECENT_INTERVIEWS_LIMIT, UNKNOWN_LANGUAGE, UNKNOWN_STUDENT_NAME
from codefessor.exceptions import (
    InterviewNotCompletedError,
    NotFoundError,
    QuotaExceededError,
    UpstreamUnavailableError,
)
from codefessor.models.analysis import (
    ANALYSIS_FAILED_REASON,
    QUOTA_EXCEEDED_REASON,
    AnalysisResult,
    AnalyzeTranscriptResponse,
    StudentInfo,
    build_placeholder,
)
from codefessor.models.interview import (
    InterviewRecord,
    InterviewSession,
    InterviewStatusResponse,
    ManualCheckResponse,
)
from codefessor.models.teacher import (
    DashboardInterview,
    InterviewDetailResponse,
    RecentInterviewsResponse,
)
from codefessor.repositories.analysis_result_repo import AnalysisResultRepository
from codefessor.repositories.session_repo import InterviewSessionRepository

logger = logging.getLogger(__name__)

SESSION_LOST_NOTE = "Session data was lost. Analysis performed without original code context."
SESSION_LOST_SNAPSHOT_NOTE = "Session data was lost. Showing the submission stored with the analysis."
QUOTA_REASONING = "Gemini API quota exceeded. Try again in 24 hours."
QUOTA_OBSERVATION = "AI analysis temporarily unavailable due to quota limits"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _public_student_info(info: StudentInfo) -> StudentInfo:
    """Student info without the code (the code is returned separately)."""
    return info.model_copy(update={"code": None})


class AnalysisService:
    """Authorship analysis for completed interviews, with a persistent result cache."""

    def __init__(
        self,
        llm,
        ribbon,
        results: AnalysisResultRepository,
        sessions: InterviewSessionRepository,
    ):
        self.llm = llm
        self.ribbon = ribbon
        self.results = results
        self.sessions = sessions

    # =========================================================================
    # Cache
    # =========================================================================

    def _student_info(self, session: Optional[InterviewSession]) -> StudentInfo:
        return session.student_info() if session else StudentInfo()

    def _store(self, interview_id: str, result: AnalysisResult) -> None:
        try:
            self.results.put(interview_id, result)
        except OSError as e:
            # The in-memory entry is kept, only the file is stale
            logger.error(f"[CACHE] Failed to persist analysis result for {interview_id}: {e}")

    async def _judge(self, record: InterviewRecord, session: Optional[InterviewSession]) -> AnalysisResult:
        code = session.submission.code if session else None
        if session is None:
            logger.info(f"[ANALYSIS] No session for {record.interview_id}, analyzing without original code")

        judgment = await judge_transcript(record.transcript, code, self.llm)
        judgment.pop("aiLikelihood", None)

        return AnalysisResult(
            **judgment,
            analyzedAt=_utcnow(),
            interviewId=record.interview_id,
            studentInfo=self._student_info(session),
        )

    async def get_or_create_analysis(
        self,
        record: InterviewRecord,
        cache_quota_placeholder: bool = False,
    ) -> AnalysisResult:
        """
        Return the cached verdict for the interview, judging it on a miss.

        Args:
            record: A completed interview
            cache_quota_placeholder: Dashboard mode. A quota failure is turned
                into a cached placeholder, and cached quota placeholders are
                served as-is. Other placeholders always count as a miss, and
                outside dashboard mode a quota failure raises without caching
                anything.

        Raises:
            QuotaExceededError: Quota hit outside dashboard mode
            UpstreamUnavailableError: Any other Gemini failure
        """
        interview_id = record.interview_id
        cached = self.results.get(interview_id)
        if cached is not None and (
            not cached.is_placeholder
            or (cache_quota_placeholder and cached.unavailableReason == QUOTA_EXCEEDED_REASON)
        ):
            logger.info(f"[ANALYSIS] Using previously analyzed results for interview {interview_id}")
            return cached

        session = self.sessions.get(interview_id)
        logger.info(f"[ANALYSIS] Analyzing interview {interview_id} (not previously analyzed)")
        try:
            result = await self._judge(record, session)
        except QuotaExceededError:
            if not cache_quota_placeholder:
                raise
            logger.warning(f"[ANALYSIS] Gemini quota exceeded, caching placeholder for interview {interview_id}")
            placeholder = build_placeholder(
                QUOTA_EXCEEDED_REASON,
                QUOTA_REASONING,
                interview_id,
                self._student_info(session),
                key_observations=[QUOTA_OBSERVATION],
            )
            self._store(interview_id, placeholder)
            return placeholder

        # Completed interviews without a transcript yet are not cached
        if record.transcript:
            self._store(interview_id, result)
        logger.info(f"[ANALYSIS] Analysis complete for {interview_id} - Score: {result.score}")
        return result

    # =========================================================================
    # Student-facing
    # =========================================================================

    async def get_interview_status(self, interview_id: str) -> InterviewStatusResponse:
        """Poll the platform and, once completed, return the verdict."""
        record = await self.ribbon.get_interview(interview_id)
        if record is None:
            return InterviewStatusResponse(
                status="pending",
                message="Interview not completed yet. Please complete the interview and wait a moment.",
            )

        if not record.is_completed:
            return InterviewStatusResponse(
                status=record.status or "unknown",
                message=f"Interview status: {record.status}. Please wait for completion.",
            )

        session = self.sessions.get(interview_id)
        analysis = await self.get_or_create_analysis(record)

        if session is not None:
            return InterviewStatusResponse(
                status="completed",
                analysis=analysis,
                transcript=record.transcript,
                originalCode=session.submission.code,
                studentInfo=_public_student_info(session.student_info()),
            )

        snapshot = analysis.studentInfo or StudentInfo()
        return InterviewStatusResponse(
            status="completed",
            analysis=analysis,
            transcript=record.transcript,
            originalCode=snapshot.code,
            studentInfo=_public_student_info(snapshot),
            sessionLost=True,
            note=SESSION_LOST_SNAPSHOT_NOTE if snapshot.code else SESSION_LOST_NOTE,
        )

    async def analyze_transcript(
        self,
        transcript: str,
        code: Optional[str] = None,
        language: Optional[str] = None,
        student_name: Optional[str] = None,
    ) -> AnalyzeTranscriptResponse:
        """Judge a transcript outside any interview. Nothing is cached."""
        logger.info(f"[ANALYSIS] Running ad-hoc detection analysis for {student_name or 'unknown student'}")
        judgment = await judge_transcript(transcript, code, self.llm)
        judgment.pop("aiLikelihood", None)

        info = StudentInfo(name=student_name or UNKNOWN_STUDENT_NAME, language=language or UNKNOWN_LANGUAGE)
        return AnalyzeTranscriptResponse(
            analysis=AnalysisResult(**judgment, analyzedAt=_utcnow(), studentInfo=info),
            originalCode=code,
            transcript=transcript,
            studentInfo=info,
            timestamp=_utcnow(),
        )

    async def manual_check(self, interview_id: str) -> ManualCheckResponse:
        """Look an interview up on the platform and analyze it if completed."""
        record = await self.ribbon.get_interview(interview_id)
        if record is None:
            return ManualCheckResponse(found=False, message="Interview not found in Ribbon API")

        analysis = await self.get_or_create_analysis(record) if record.is_completed else None
        return ManualCheckResponse(
            found=True,
            interviewId=record.interview_id,
            flowId=record.interview_flow_id,
            status=record.status,
            analysis=analysis,
            transcript=record.transcript,
            note="Manual check - no original code context available" if self.sessions.get(interview_id) is None else None,
        )

    # =========================================================================
    # Teacher-facing
    # =========================================================================

    async def get_recent_interviews(self, limit: int = RECENT_INTERVIEWS_LIMIT) -> RecentInterviewsResponse:
        """
        Newest completed interviews with their coarse verdicts.

        Only the `limit` newest completed interviews are judged. Quota
        failures become cached placeholders, other failures an uncached
        "analysis failed" row.
        """
        records = await self.ribbon.list_interviews()
        logger.info(f"[DASHBOARD] Found {len(records)} total interviews")

        now = _utcnow()
        completed = [r for r in records if r.is_completed and r.transcript]
        completed.sort(key=lambda r: r.completed_at or now, reverse=True)

        rows = []
        for record in completed[:limit]:
            try:
                analysis = await self.get_or_create_analysis(record, cache_quota_placeholder=True)
            except UpstreamUnavailableError as e:
                logger.error(f"[DASHBOARD] Failed to analyze interview {record.interview_id}: {e.message}")
                analysis = build_placeholder(
                    ANALYSIS_FAILED_REASON,
                    f"Analysis failed: {e.detail}",
                    record.interview_id,
                    self._student_info(self.sessions.get(record.interview_id)),
                )

            info = analysis.studentInfo or self._student_info(self.sessions.get(record.interview_id))
            rows.append(DashboardInterview(
                interviewId=record.interview_id,
                studentName=info.name,
                studentEmail=info.email,
                language=info.language,
                aiScore=analysis.score,
                aiLikelihood=analysis.teacherLikelihood,
                confidence=analysis.confidence,
                completedAt=record.completed_at or now,
                transcriptLength=len(record.transcript or ""),
                hasOriginalCode=bool(info.code),
            ))

        logger.info(
            f"[DASHBOARD] Returning {len(rows)} recent completed interviews: "
            + ", ".join(f"{r.studentName}: {r.aiScore} ({r.aiLikelihood})" for r in rows)
        )
        return RecentInterviewsResponse(
            interviews=rows,
            totalProcessed=len(completed),
            totalAvailable=len(records),
        )

    async def get_interview_detail(self, interview_id: str) -> InterviewDetailResponse:
        """
        Full verdict for one interview.

        Raises:
            NotFoundError: Interview is not on the platform
            InterviewNotCompletedError: Interview has not finished
            QuotaExceededError / UpstreamUnavailableError: Judge failed
        """
        record = await self.ribbon.get_interview(interview_id)
        if record is None:
            raise NotFoundError("Interview", interview_id)
        if not record.is_completed:
            raise InterviewNotCompletedError(interview_id, record.status)

        analysis = await self.get_or_create_analysis(record)
        info = analysis.studentInfo or self._student_info(self.sessions.get(interview_id))

        return InterviewDetailResponse(
            interviewId=interview_id,
            studentInfo=_public_student_info(info),
            originalCode=info.code,
            transcript=record.transcript,
            analysis=analysis,
            aiLikelihood=analysis.teacherLikelihood,
            completedAt=record.completed_at or _utcnow(),
            interviewFlowId=record.interview_flow_id,
            hasOriginalCode=bool(info.code),
        )

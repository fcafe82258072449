from typing import Dict


def otp_email(code: str, brand: str, ttl_minutes: int = 10) -> Dict[str, str]:
    subject = f"🧇 Your {brand} OTP Code"
    html = f"""
    <div style="font-family:Arial,sans-serif;max-width:600px;margin:auto;padding:24px;background:#fef7ed">
      <h1 style="margin:0 0 8px 0;color:#ea580c;">🧇 {brand}</h1>
      <p style="margin:0 0 16px 0;color:#6b7280;">Enter this code to claim your offer!</p>
      <div style="display:inline-block;background:#f59e0b;color:#fff;padding:16px 32px;border-radius:12px;
                  font-size:2rem;font-weight:bold;letter-spacing:8px;font-family:'Courier New',monospace;">
        {code}
      </div>
      <ul style="color:#92400e;margin:20px 0 0 0;padding-left:20px;">
        <li>Code expires in {ttl_minutes} minutes</li>
        <li>One-time use only</li>
      </ul>
      <p style="margin:18px 0 0 0;color:#9ca3af;font-size:12px;">
        This code is confidential. Never share it with anyone!
      </p>
    </div>
    """
    text = (
        f"{brand} - Your Verification Code: {code}\n\n"
        f"Enter this 6-digit code on the {brand} website to claim your offer.\n"
        f"The code expires in {ttl_minutes} minutes and can be used once.\n"
    )
    return {"subject": subject, "html": html, "text": text}


def otp_sms(code: str, brand: str, ttl_minutes: int = 10) -> str:
    return f"{brand}: your verification code is {code}. It expires in {ttl_minutes} minutes."

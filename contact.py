"""
Contact page: static info plus a message form stored in `messages`.
"""
import logging
import time

from content import CONTACT, CART, translate
from database import BackendError
from schemas import ContactForm

logger = logging.getLogger(__name__)


class ContactScreen:
    def __init__(self, storefront):
        self.storefront = storefront
        self.form = ContactForm()
        self.submitting = False

    def submit(self, form: ContactForm) -> bool:
        self.form = form
        language = self.storefront.language
        t = translate(CONTACT, language)
        toaster = self.storefront.toaster
        if not form.name or not form.email or not form.message:
            messages = translate(CART, language)
            toaster.error(messages["missingInfo"], messages["missingInfoDesc"])
            return False

        self.submitting = True
        try:
            self.storefront.backend.messages.create({
                "id": f"msg_{int(time.time() * 1000)}",
                "name": form.name,
                "email": form.email,
                "phone": form.phone or None,
                "message": form.message,
            })
            toaster.toast(t["form"]["success"], t["form"]["successDesc"])
            self.form = ContactForm()
            return True
        except BackendError as e:
            logger.error(f"Error sending message: {e}")
            toaster.error(t["form"]["error"])
            return False
        finally:
            self.submitting = False

    def render(self) -> dict:
        return {
            "content": translate(CONTACT, self.storefront.language),
            "form": self.form.model_dump(by_alias=True),
        }

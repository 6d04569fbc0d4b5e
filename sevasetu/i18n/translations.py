# sevasetu/i18n/translations.py
"""
Fixed message templates per language.

`en-US` is the reference table: every key must exist there. Other tables may
be incomplete; the resolver falls back to English key by key.
"""
from typing import Dict

DEFAULT_LANGUAGE = "en-US"


TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en-US": {
        "appName": "SevaSetu",
        "welcomeMessage": "Welcome to SevaSetu! I am your AI health assistant.",
        "welcomeBack": "Welcome back, {name}! How are you feeling today? Please describe your symptoms.",
        "askName": "To get started, please tell me your full name.",
        "askAge": "Thank you. What is your age?",
        "askPhone": "What is your phone number?",
        "askLocation": "Which city or area do you live in?",
        "thanksPatientDetails": "Thank you, {name}. Your details are saved. Please describe your symptoms, or attach a photo.",
        "processingVoice": "Processing voice message...",
        "instructions": (
            "Describe your symptoms by typing or by pressing the microphone button and speaking. "
            "You can also attach a photo. After the assistant replies, you can generate a "
            "prescription or search for nearby hospitals."
        ),
        "error": "Error",
        "aiError": "Sorry, I could not get a response. Please try again.",
        "voiceError": "Sorry, I could not process your voice message. Please try again.",
        "prescriptionError": "Sorry, the prescription could not be generated. Please try again.",
        "micError": "Microphone unavailable",
        "micErrorDescription": "Please allow microphone access in your browser settings.",
        "locationError": "Location unavailable",
        "locationErrorDescription": "We could not get your location, so results may be less relevant.",
        "prescriptionTitle": "Prescription",
        "patientDetailsTitle": "Patient Details",
        "patientName": "Name",
        "patientAge": "Age",
        "patientPhone": "Phone",
        "date": "Date",
        "diagnosisTitle": "Diagnosis",
        "medicinesTitle": "Medicines",
        "instructionsTitle": "Instructions",
        "disclaimer": "This is an AI-generated suggestion and not a substitute for advice from a qualified doctor.",
    },
    "hi-IN": {
        "appName": "सेवासेतु",
        "welcomeMessage": "सेवासेतु में आपका स्वागत है! मैं आपका एआई स्वास्थ्य सहायक हूँ।",
        "welcomeBack": "फिर से स्वागत है, {name}! आज आप कैसा महसूस कर रहे हैं? कृपया अपने लक्षण बताइए।",
        "askName": "शुरू करने के लिए, कृपया अपना पूरा नाम बताइए।",
        "askAge": "धन्यवाद। आपकी उम्र क्या है?",
        "askPhone": "आपका फ़ोन नंबर क्या है?",
        "askLocation": "आप किस शहर या क्षेत्र में रहते हैं?",
        "thanksPatientDetails": "धन्यवाद, {name}। आपकी जानकारी सहेज ली गई है। कृपया अपने लक्षण बताइए या फ़ोटो लगाइए।",
        "processingVoice": "आवाज़ संदेश संसाधित हो रहा है...",
        "instructions": (
            "अपने लक्षण लिखकर या माइक्रोफ़ोन बटन दबाकर बोलकर बताइए। आप फ़ोटो भी लगा सकते हैं। "
            "सहायक के जवाब के बाद आप पर्चा बना सकते हैं या पास के अस्पताल खोज सकते हैं।"
        ),
        "error": "त्रुटि",
        "aiError": "क्षमा करें, जवाब नहीं मिल सका। कृपया फिर से प्रयास करें।",
        "voiceError": "क्षमा करें, आपका आवाज़ संदेश संसाधित नहीं हो सका। कृपया फिर से प्रयास करें।",
        "prescriptionError": "क्षमा करें, पर्चा नहीं बन सका। कृपया फिर से प्रयास करें।",
        "micError": "माइक्रोफ़ोन उपलब्ध नहीं है",
        "micErrorDescription": "कृपया ब्राउज़र सेटिंग्स में माइक्रोफ़ोन की अनुमति दें।",
        "locationError": "स्थान उपलब्ध नहीं है",
        "locationErrorDescription": "आपका स्थान नहीं मिल सका, इसलिए परिणाम कम प्रासंगिक हो सकते हैं।",
        "prescriptionTitle": "पर्चा",
        "patientDetailsTitle": "रोगी का विवरण",
        "patientName": "नाम",
        "patientAge": "उम्र",
        "patientPhone": "फ़ोन",
        "date": "तारीख",
        "diagnosisTitle": "निदान",
        "medicinesTitle": "दवाइयाँ",
        "instructionsTitle": "निर्देश",
        "disclaimer": "यह एआई द्वारा दिया गया सुझाव है, योग्य डॉक्टर की सलाह का विकल्प नहीं है।",
    },
    "mr-IN": {
        "appName": "सेवासेतु",
        "welcomeMessage": "सेवासेतुमध्ये आपले स्वागत आहे! मी तुमचा एआय आरोग्य सहाय्यक आहे.",
        "welcomeBack": "पुन्हा स्वागत आहे, {name}! आज तुम्हाला कसे वाटते? कृपया तुमची लक्षणे सांगा.",
        "askName": "सुरुवात करण्यासाठी, कृपया तुमचे पूर्ण नाव सांगा.",
        "askAge": "धन्यवाद. तुमचे वय किती आहे?",
        "askPhone": "तुमचा फोन नंबर काय आहे?",
        "askLocation": "तुम्ही कोणत्या शहरात किंवा भागात राहता?",
        "thanksPatientDetails": "धन्यवाद, {name}. तुमची माहिती जतन केली आहे. कृपया तुमची लक्षणे सांगा किंवा फोटो जोडा.",
        "processingVoice": "आवाज संदेशावर प्रक्रिया सुरू आहे...",
        "instructions": (
            "तुमची लक्षणे टाइप करून किंवा मायक्रोफोन बटण दाबून बोलून सांगा. तुम्ही फोटोही जोडू शकता. "
            "सहाय्यकाच्या उत्तरानंतर तुम्ही प्रिस्क्रिप्शन तयार करू शकता किंवा जवळची रुग्णालये शोधू शकता."
        ),
        "error": "त्रुटी",
        "aiError": "क्षमस्व, उत्तर मिळू शकले नाही. कृपया पुन्हा प्रयत्न करा.",
        "voiceError": "क्षमस्व, तुमचा आवाज संदेश प्रक्रिया करता आला नाही. कृपया पुन्हा प्रयत्न करा.",
        "prescriptionError": "क्षमस्व, प्रिस्क्रिप्शन तयार होऊ शकले नाही. कृपया पुन्हा प्रयत्न करा.",
        "micError": "मायक्रोफोन उपलब्ध नाही",
        "micErrorDescription": "कृपया ब्राउझर सेटिंग्जमध्ये मायक्रोफोनला परवानगी द्या.",
        "locationError": "स्थान उपलब्ध नाही",
        "locationErrorDescription": "तुमचे स्थान मिळू शकले नाही, त्यामुळे निकाल कमी संबंधित असू शकतात.",
        "prescriptionTitle": "प्रिस्क्रिप्शन",
        "patientDetailsTitle": "रुग्णाची माहिती",
        "patientName": "नाव",
        "patientAge": "वय",
        "patientPhone": "फोन",
        "date": "दिनांक",
        "diagnosisTitle": "निदान",
        "medicinesTitle": "औषधे",
        "instructionsTitle": "सूचना",
        "disclaimer": "ही एआयने दिलेली सूचना आहे, पात्र डॉक्टरांच्या सल्ल्याला पर्याय नाही.",
    },
    "ta-IN": {
        "appName": "சேவாசேது",
        "welcomeMessage": "சேவாசேதுவுக்கு வரவேற்கிறோம்! நான் உங்கள் AI சுகாதார உதவியாளர்.",
        "welcomeBack": "மீண்டும் வருக, {name}! இன்று எப்படி உணர்கிறீர்கள்? உங்கள் அறிகுறிகளை விவரிக்கவும்.",
        "askName": "தொடங்க, உங்கள் முழுப் பெயரைச் சொல்லுங்கள்.",
        "askAge": "நன்றி. உங்கள் வயது என்ன?",
        "askPhone": "உங்கள் தொலைபேசி எண் என்ன?",
        "askLocation": "நீங்கள் எந்த நகரம் அல்லது பகுதியில் வசிக்கிறீர்கள்?",
        "thanksPatientDetails": "நன்றி, {name}. உங்கள் விவரங்கள் சேமிக்கப்பட்டன. உங்கள் அறிகுறிகளை விவரிக்கவும் அல்லது புகைப்படத்தை இணைக்கவும்.",
        "processingVoice": "குரல் செய்தி செயலாக்கப்படுகிறது...",
        "error": "பிழை",
        "aiError": "மன்னிக்கவும், பதில் கிடைக்கவில்லை. மீண்டும் முயற்சிக்கவும்.",
        "voiceError": "மன்னிக்கவும், உங்கள் குரல் செய்தியைச் செயலாக்க முடியவில்லை. மீண்டும் முயற்சிக்கவும்.",
        "prescriptionError": "மன்னிக்கவும், மருந்துச்சீட்டை உருவாக்க முடியவில்லை. மீண்டும் முயற்சிக்கவும்.",
        "micError": "மைக்ரோஃபோன் கிடைக்கவில்லை",
        "micErrorDescription": "உலாவி அமைப்புகளில் மைக்ரோஃபோன் அனுமதியை வழங்கவும்.",
        "locationError": "இருப்பிடம் கிடைக்கவில்லை",
        "locationErrorDescription": "உங்கள் இருப்பிடத்தைப் பெற முடியவில்லை, எனவே முடிவுகள் குறைவாகப் பொருந்தலாம்.",
        "prescriptionTitle": "மருந்துச்சீட்டு",
        "patientName": "பெயர்",
        "patientAge": "வயது",
        "patientPhone": "தொலைபேசி",
        "date": "தேதி",
        "diagnosisTitle": "நோயறிதல்",
        "medicinesTitle": "மருந்துகள்",
        "instructionsTitle": "அறிவுரைகள்",
        "disclaimer": "இது AI உருவாக்கிய பரிந்துரை; தகுதியான மருத்துவரின் ஆலோசனைக்கு மாற்றாகாது.",
    },
    "bn-IN": {
        "appName": "সেবাসেতু",
        "welcomeMessage": "সেবাসেতুতে স্বাগতম! আমি আপনার এআই স্বাস্থ্য সহকারী।",
        "welcomeBack": "আবার স্বাগতম, {name}! আজ কেমন বোধ করছেন? অনুগ্রহ করে আপনার উপসর্গ বলুন।",
        "askName": "শুরু করতে, অনুগ্রহ করে আপনার পুরো নাম বলুন।",
        "askAge": "ধন্যবাদ। আপনার বয়স কত?",
        "askPhone": "আপনার ফোন নম্বর কী?",
        "askLocation": "আপনি কোন শহর বা এলাকায় থাকেন?",
        "thanksPatientDetails": "ধন্যবাদ, {name}। আপনার তথ্য সংরক্ষিত হয়েছে। অনুগ্রহ করে আপনার উপসর্গ বলুন বা ছবি যুক্ত করুন।",
        "processingVoice": "ভয়েস বার্তা প্রক্রিয়া করা হচ্ছে...",
        "error": "ত্রুটি",
        "aiError": "দুঃখিত, উত্তর পাওয়া যায়নি। অনুগ্রহ করে আবার চেষ্টা করুন।",
        "voiceError": "দুঃখিত, আপনার ভয়েস বার্তা প্রক্রিয়া করা যায়নি। অনুগ্রহ করে আবার চেষ্টা করুন।",
        "prescriptionError": "দুঃখিত, প্রেসক্রিপশন তৈরি করা যায়নি। অনুগ্রহ করে আবার চেষ্টা করুন।",
        "micError": "মাইক্রোফোন পাওয়া যাচ্ছে না",
        "micErrorDescription": "অনুগ্রহ করে ব্রাউজার সেটিংসে মাইক্রোফোনের অনুমতি দিন।",
        "locationError": "অবস্থান পাওয়া যাচ্ছে না",
        "locationErrorDescription": "আপনার অবস্থান পাওয়া যায়নি, তাই ফলাফল কম প্রাসঙ্গিক হতে পারে।",
        "prescriptionTitle": "প্রেসক্রিপশন",
        "patientName": "নাম",
        "patientAge": "বয়স",
        "patientPhone": "ফোন",
        "date": "তারিখ",
        "diagnosisTitle": "রোগনির্ণয়",
        "medicinesTitle": "ওষুধ",
        "instructionsTitle": "নির্দেশাবলী",
        "disclaimer": "এটি এআই-এর দেওয়া পরামর্শ, যোগ্য ডাক্তারের পরামর্শের বিকল্প নয়।",
    },
}
